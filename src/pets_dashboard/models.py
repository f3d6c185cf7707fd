"""
TypedDict models for responses from the Petfinder v2 API and the views built on them.

Includes:
- Animal (+ nested Breeds, Colors, Photo, Contact, Address): record from /animals
- TokenResponse: /oauth2/token payload
- AnimalsPage / AnimalEnvelope: list and single-record envelopes
- FilterState: dashboard search + type selector
- DashboardStats: aggregates over the full list
- ChartPoint: one (name, value) entry for a chart

Every API field is optional: the API omits or nulls what it does not know.
"""

from __future__ import annotations
from typing import TypedDict, List, Dict, Optional

# POST /oauth2/token
class TokenResponse(TypedDict, total=False):
    token_type: str
    expires_in: int          # seconds
    access_token: str

class Breeds(TypedDict, total=False):
    primary: Optional[str]
    secondary: Optional[str]
    mixed: bool
    unknown: bool

class Colors(TypedDict, total=False):
    primary: Optional[str]
    secondary: Optional[str]
    tertiary: Optional[str]

class Photo(TypedDict, total=False):
    small: str
    medium: str
    large: str
    full: str

class Address(TypedDict, total=False):
    address1: Optional[str]
    address2: Optional[str]
    city: Optional[str]
    state: Optional[str]
    postcode: Optional[str]
    country: Optional[str]

class Contact(TypedDict, total=False):
    email: Optional[str]
    phone: Optional[str]
    address: Address

# GET /animals (items), GET /animals/{id}
class Animal(TypedDict, total=False):
    id: int
    name: str
    type: str
    species: str
    breeds: Breeds
    colors: Colors
    age: str                 # Baby | Young | Adult | Senior
    size: str
    gender: str
    status: str
    description: Optional[str]
    photos: List[Photo]
    tags: List[str]
    contact: Contact

# GET /animals?limit=100
class AnimalsPage(TypedDict, total=False):
    animals: List[Animal]

# GET /animals/{id}
class AnimalEnvelope(TypedDict, total=False):
    animal: Animal

class FilterState(TypedDict):
    search: str
    type: str                # "all" or a concrete type

class ChartPoint(TypedDict):
    name: str
    value: int

class DashboardStats(TypedDict):
    total: int
    average_age: float       # NaN for an empty list
    average_age_label: Optional[str]
    types: List[str]         # first-seen order
    type_counts: Dict[str, int]
    age_counts: Dict[str, int]
