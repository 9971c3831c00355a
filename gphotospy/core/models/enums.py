"""Enumerations used on the wire."""
from enum import Enum


class ContentCategory(str, Enum):
    """Content categories understood by media item search."""
    NONE = 'NONE'
    LANDSCAPES = 'LANDSCAPES'
    RECEIPTS = 'RECEIPTS'
    CITYSCAPES = 'CITYSCAPES'
    LANDMARKS = 'LANDMARKS'
    SELFIES = 'SELFIES'
    PEOPLE = 'PEOPLE'
    PETS = 'PETS'
    WEDDINGS = 'WEDDINGS'
    BIRTHDAYS = 'BIRTHDAYS'
    DOCUMENTS = 'DOCUMENTS'
    TRAVEL = 'TRAVEL'
    ANIMALS = 'ANIMALS'
    FOOD = 'FOOD'
    SPORT = 'SPORT'
    NIGHT = 'NIGHT'
    PERFORMANCES = 'PERFORMANCES'
    WHITEBOARDS = 'WHITEBOARDS'
    SCREENSHOTS = 'SCREENSHOTS'
    UTILITY = 'UTILITY'
    ARTS = 'ARTS'
    CRAFTS = 'CRAFTS'
    FASHION = 'FASHION'
    HOUSES = 'HOUSES'
    GARDENS = 'GARDENS'
    FLOWERS = 'FLOWERS'
    HOLIDAYS = 'HOLIDAYS'


class MediaType(str, Enum):
    ALL_MEDIA = 'ALL_MEDIA'
    VIDEO = 'VIDEO'
    PHOTO = 'PHOTO'


class Feature(str, Enum):
    NONE = 'NONE'
    FAVORITES = 'FAVORITES'


class PositionType(str, Enum):
    """Where new media items land inside an album."""
    POSITION_TYPE_UNSPECIFIED = 'POSITION_TYPE_UNSPECIFIED'
    FIRST_IN_ALBUM = 'FIRST_IN_ALBUM'
    LAST_IN_ALBUM = 'LAST_IN_ALBUM'
    AFTER_MEDIA_ITEM = 'AFTER_MEDIA_ITEM'
    AFTER_ENRICHMENT_ITEM = 'AFTER_ENRICHMENT_ITEM'
