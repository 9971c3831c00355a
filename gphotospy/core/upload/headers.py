"""Upload protocol header names and values."""

CONTENT_TYPE = 'X-Goog-Upload-Content-Type'
PROTOCOL = 'X-Goog-Upload-Protocol'
COMMAND = 'X-Goog-Upload-Command'
FILE_NAME = 'X-Goog-Upload-File-Name'
RAW_SIZE = 'X-Goog-Upload-Raw-Size'
URL = 'X-Goog-Upload-URL'
OFFSET = 'X-Goog-Upload-Offset'
STATUS = 'X-Goog-Upload-Status'
CHUNK_GRANULARITY = 'X-Goog-Upload-Chunk-Granularity'
SIZE_RECEIVED = 'X-Goog-Upload-Size-Received'

PROTOCOL_RAW = 'raw'
PROTOCOL_RESUMABLE = 'resumable'

COMMAND_START = 'start'
COMMAND_UPLOAD = 'upload'
COMMAND_UPLOAD_FINALIZE = 'upload, finalize'
COMMAND_QUERY = 'query'
