"""
Upload coordinator.

Drives the upload protocol: an optional start handshake, then either one
request carrying the whole file or a sequence of offset-addressed chunks
with query-and-retry on failure.
"""
from pathlib import Path
from typing import Callable, Dict, Optional, Union
from urllib.parse import quote

from . import headers as h
from .models import UploadConfig, UploadMethod, UploadProgress, UploadSession
from .protocols import ChunkReaderProtocol, FileValidatorProtocol, TransportProtocol
from .services import ChunkCursor, FileValidator
from ..api.endpoints import RequestUris
from ..exceptions import GooglePhotosException, ProtocolViolation
from ..logging import get_logger

logger = get_logger('gphotospy.upload')

ProgressCallback = Callable[[UploadProgress], None]
CursorFactory = Callable[[Path], ChunkReaderProtocol]


class UploadCoordinator:
    """
    Coordinates the file upload process.

    Uses dependency injection for all components, making it:
    - Testable (scripted transport, in-memory readers)
    - Shareable (one transport for many concurrent uploads)

    Every call owns its UploadSession and file cursor; nothing is kept
    on the coordinator between calls.
    """

    def __init__(
        self,
        transport: TransportProtocol,
        config: Optional[UploadConfig] = None,
        validator: Optional[FileValidatorProtocol] = None,
        cursor_factory: Optional[CursorFactory] = None,
        progress_callback: Optional[ProgressCallback] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            transport: Transport used for every request
            config: Upload policy (retry limit, size ceilings)
            validator: File validator implementation
            cursor_factory: Builds the forward-only reader for a path
            progress_callback: Called after every accepted chunk
        """
        self._transport = transport
        self._config = config or UploadConfig()
        self._validator = validator or FileValidator(self._config)
        self._cursor_factory = cursor_factory or ChunkCursor
        self._progress_callback = progress_callback

    @property
    def config(self) -> UploadConfig:
        return self._config

    async def upload_media(
        self,
        path: Union[str, Path],
        method: UploadMethod = UploadMethod.RESUMABLE_CHUNKED,
        on_progress: Optional[ProgressCallback] = None
    ) -> Optional[str]:
        """
        Upload a media file and return its upload token.

        Args:
            path: Image or video file
            method: Upload method
            on_progress: Called with UploadProgress after each accepted chunk

        Returns:
            Upload token, or None when a chunk kept failing past the retry
            limit (the upload was abandoned)

        Raises:
            ValidationError: If the file cannot be uploaded (no request made)
            RemoteApiError: If the server answered with an error payload
            ProtocolViolation: If the start handshake lacks required headers
            TransportFailure: On connection errors
        """
        file_path, size, mime_type, category = self._validator.validate(path)
        session = UploadSession(
            file_path=file_path,
            size=size,
            mime_type=mime_type,
            category=category,
            method=UploadMethod(method)
        )
        size_mb = size / (1024 * 1024)
        logger.info(f"Starting upload: {session.file_name} ({size_mb:.2f} MB, {mime_type}, {session.method.value})")

        cursor = self._cursor_factory(file_path)
        try:
            if session.method == UploadMethod.SIMPLE:
                token = await self._upload_simple(session, cursor)
            else:
                await self._start(session)
                if session.method == UploadMethod.RESUMABLE_SINGLE:
                    token = await self._upload_single(session, cursor)
                else:
                    token = await self._upload_chunks(session, cursor, on_progress)
        finally:
            await cursor.close()
            logger.debug("File cursor closed")

        session.upload_token = token
        if token is None:
            logger.warning(f"Upload abandoned: {session.file_name} after {self._config.retry_limit} attempts")
        else:
            logger.info(f"Upload finished: {session.file_name}")
        return token

    async def _upload_simple(self, session: UploadSession, cursor: ChunkReaderProtocol) -> Optional[str]:
        """One raw request with the full file."""
        data = await cursor.read_all()
        response = await self._transport.send(
            'POST',
            RequestUris.UPLOADS,
            body=data,
            headers={
                h.CONTENT_TYPE: session.mime_type,
                h.PROTOCOL: h.PROTOCOL_RAW,
            },
            parse=str
        )
        response.raise_for_error()
        return response.result

    async def _start(self, session: UploadSession) -> None:
        """
        Open a resumable upload session.

        Fills in ``session_url`` and ``chunk_granularity``.
        """
        response = await self._transport.send(
            'POST',
            RequestUris.UPLOADS,
            body=b'',
            headers={
                h.CONTENT_TYPE: session.mime_type,
                h.COMMAND: h.COMMAND_START,
                h.FILE_NAME: quote(session.file_name),
                h.PROTOCOL: h.PROTOCOL_RESUMABLE,
                h.RAW_SIZE: str(session.size),
            },
            parse=str
        )
        response.raise_for_error()
        logger.debug(f"Start handshake status: {response.header(h.STATUS)}")

        upload_url = response.header(h.URL)
        if not upload_url:
            raise ProtocolViolation(f"Start response is missing {h.URL}", header=h.URL)
        session.session_url = upload_url

        raw_granularity = response.header(h.CHUNK_GRANULARITY)
        granularity = None
        if raw_granularity is not None:
            try:
                granularity = int(raw_granularity)
            except ValueError:
                granularity = None
        if granularity is not None and granularity <= 0:
            raise ProtocolViolation(
                f"Invalid {h.CHUNK_GRANULARITY}: {raw_granularity}",
                header=h.CHUNK_GRANULARITY
            )
        if granularity is None and session.method == UploadMethod.RESUMABLE_CHUNKED:
            raise ProtocolViolation(
                f"Start response is missing a usable {h.CHUNK_GRANULARITY}: {raw_granularity!r}",
                header=h.CHUNK_GRANULARITY
            )
        session.chunk_granularity = granularity

    async def _query(self, session: UploadSession):
        """Ask the server what it has recorded for this upload session."""
        response = await self._transport.send(
            'POST',
            session.session_url,
            headers={h.COMMAND: h.COMMAND_QUERY},
            parse=str
        )
        logger.debug(
            f"Query {session.file_name}: status={response.header(h.STATUS)}, "
            f"size_received={response.header(h.SIZE_RECEIVED)}"
        )
        return response

    async def _upload_single(self, session: UploadSession, cursor: ChunkReaderProtocol) -> Optional[str]:
        """Whole file in one finalizing request; one query if it fails, no retry."""
        data = await cursor.read_all()
        response = await self._transport.send(
            'POST',
            session.session_url,
            body=data,
            headers={
                h.OFFSET: '0',
                h.COMMAND: h.COMMAND_UPLOAD_FINALIZE,
            },
            parse=str
        )
        if not response.ok:
            logger.warning(f"Upload of {session.file_name} interrupted (HTTP {response.status}), querying status")
            response = await self._query(session)
            response.raise_for_error()
            return response.result

        session.acknowledge(len(data))
        return response.result

    async def _upload_chunks(
        self,
        session: UploadSession,
        cursor: ChunkReaderProtocol,
        on_progress: Optional[ProgressCallback]
    ) -> Optional[str]:
        """
        Send the file chunk by chunk.

        A failed chunk is followed by a query and resent from the same
        offset; the pending bytes are kept until the server accepts them.
        """
        granularity = session.chunk_granularity
        logger.info(f"File split into {session.batch_count} chunks of {granularity} bytes")
        pending: Optional[bytes] = None

        while True:
            attempt = session.begin_attempt()
            if attempt > self._config.retry_limit:
                logger.warning(
                    f"Chunk {session.batch_index} of {session.file_name} failed "
                    f"{self._config.retry_limit} times at offset {session.offset}"
                )
                return None

            last_chunk = session.is_last_chunk
            if pending is None:
                pending = await cursor.read(granularity)
                if not pending:
                    raise GooglePhotosException(
                        f"{session.file_name} ended at {session.offset} bytes, expected {session.size}"
                    )

            response = await self._transport.send(
                'POST',
                session.session_url,
                body=pending,
                headers=self._chunk_headers(session.offset, last_chunk),
                parse=str
            )

            if not response.ok:
                logger.debug(
                    f"Chunk {session.batch_index} failed with HTTP {response.status} "
                    f"(attempt {attempt}), querying status"
                )
                await self._query(session)
                continue

            sent = len(pending)
            session.acknowledge(sent)
            pending = None
            self._emit(UploadProgress(
                file_name=session.file_name,
                total_bytes=session.size,
                batch_index=session.batch_index - 1,
                uploaded_bytes=session.offset,
                batch_size=sent
            ), on_progress)

            if last_chunk:
                return response.result

    @staticmethod
    def _chunk_headers(offset: int, last_chunk: bool) -> Dict[str, str]:
        return {
            h.COMMAND: h.COMMAND_UPLOAD_FINALIZE if last_chunk else h.COMMAND_UPLOAD,
            h.OFFSET: str(offset),
        }

    def _emit(self, progress: UploadProgress, on_progress: Optional[ProgressCallback]) -> None:
        logger.debug(
            f"Chunk {progress.batch_index} accepted: {progress.uploaded_bytes}/{progress.total_bytes} "
            f"({progress.percentage:.1f}%)"
        )
        if on_progress:
            on_progress(progress)
        if self._progress_callback:
            self._progress_callback(progress)
