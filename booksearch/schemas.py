"""Typed views of the provider JSON payloads.

Only the fields we read are declared; everything else is ignored.
"""
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Schema(BaseModel):
    model_config = ConfigDict(extra="ignore")


# Google Books

class GoogleIndustryIdentifier(_Schema):
    type: Optional[str] = None
    identifier: Optional[str] = None


class GoogleImageLinks(_Schema):
    thumbnail: Optional[str] = None
    smallThumbnail: Optional[str] = None


class GoogleVolumeInfo(_Schema):
    title: Optional[str] = None
    authors: Optional[List[str]] = None
    publishedDate: Optional[str] = None
    publisher: Optional[str] = None
    description: Optional[str] = None
    pageCount: Optional[int] = None
    categories: Optional[List[str]] = None
    language: Optional[str] = None
    imageLinks: Optional[GoogleImageLinks] = None
    industryIdentifiers: Optional[List[GoogleIndustryIdentifier]] = None


class GoogleVolume(_Schema):
    id: Optional[str] = None
    volumeInfo: GoogleVolumeInfo = Field(default_factory=GoogleVolumeInfo)


class GoogleVolumesResponse(_Schema):
    totalItems: Optional[int] = None
    items: List[GoogleVolume] = Field(default_factory=list)


# Open Library (jscmd=data)

class OpenLibraryNamed(_Schema):
    name: Optional[str] = None


class OpenLibraryCover(_Schema):
    small: Optional[str] = None
    medium: Optional[str] = None
    large: Optional[str] = None


class OpenLibraryText(_Schema):
    value: Optional[str] = None


class OpenLibraryBook(_Schema):
    title: Optional[str] = None
    authors: Optional[List[OpenLibraryNamed]] = None
    publish_date: Optional[str] = None
    publishers: Optional[List[OpenLibraryNamed]] = None
    number_of_pages: Optional[int] = None
    cover: Optional[OpenLibraryCover] = None
    notes: Optional[Union[str, OpenLibraryText]] = None
    description: Optional[Union[str, OpenLibraryText]] = None
    language: Optional[str] = None


OpenLibraryResponse = Dict[str, OpenLibraryBook]
