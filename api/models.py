"""
Pydantic request/response models for the API.

``ApplicationForm`` is the demo page's form: every component in the library
binds to one of its fields, and a failed validation is turned into a
``ModelState`` so the page re-renders with inline errors.

Field() descriptions and examples feed the OpenAPI docs.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from utils.strings import normalize_whitespace

# ── Lookup models ─────────────────────────────────────────────────────────────


class OrganisationOut(BaseModel):
    """One organisation lookup record."""
    label: str = Field(..., description="Organisation name shown to the user", examples=["Johnson Ltd"])
    value: str = Field(..., description="Organisation id submitted with the form", examples=["ORG-0042"])


# ── Demo form choices ─────────────────────────────────────────────────────────

CONTACT_METHODS: list[tuple[str, str]] = [
    ("email", "Email"),
    ("phone", "Phone"),
    ("post", "Post"),
]

COUNTRIES: list[tuple[str, str]] = [
    ("england", "England"),
    ("scotland", "Scotland"),
    ("wales", "Wales"),
    ("northern-ireland", "Northern Ireland"),
]

INTERESTS: list[tuple[str, str]] = [
    ("research", "Research"),
    ("funding", "Funding"),
    ("training", "Training"),
]

DESCRIPTION_MAX_WORDS = 50

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _codes(choices: list[tuple[str, str]]) -> set[str]:
    return {code for code, _ in choices}


# ── Demo form models ──────────────────────────────────────────────────────────


class DateParts(BaseModel):
    """Day/month/year as typed into a date input.  Validated as a whole."""
    model_config = ConfigDict(populate_by_name=True)

    day: str = Field("", alias="Day")
    month: str = Field("", alias="Month")
    year: str = Field("", alias="Year")

    @model_validator(mode="after")
    def _real_date(self) -> "DateParts":
        if not (self.day.strip() or self.month.strip() or self.year.strip()):
            raise ValueError("Enter the start date")
        try:
            self.as_date()
        except ValueError:
            raise ValueError("Start date must be a real date") from None
        return self

    def as_date(self) -> date:
        return date(int(self.year), int(self.month), int(self.day))


class TeamMember(BaseModel):
    """A row of the composite team checkbox list."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="Id")
    name: str = Field(..., alias="Name")
    selected: bool = Field(False, alias="Selected")


DEFAULT_TEAM: list[TeamMember] = [
    TeamMember(id="1", name="Alex Morgan"),
    TeamMember(id="2", name="Sam Patel"),
    TeamMember(id="3", name="Jo Williams"),
]


class ApplicationForm(BaseModel):
    """The demonstration application form."""
    model_config = ConfigDict(validate_default=True)

    full_name: str = Field("", description="Applicant's full name", examples=["John Smith"])
    email: str = Field("", description="Contact email address", examples=["john@example.com"])
    organisation: str = Field("", description="Organisation picked via the autocomplete", examples=["Johnson Ltd"])
    contact_method: str = Field("", description="Preferred contact method", examples=["email"])
    country: str = Field("", description="Country code", examples=["wales"])
    interests: list[str] = Field(default_factory=list, description="Interest codes", examples=[["research"]])
    description: str = Field("", description="Short description of the application")
    notes: str = Field("", description="Optional notes")
    start_date: DateParts = Field(default_factory=dict, description="Proposed start date")
    team: list[TeamMember] = Field(default_factory=list, description="Team members to include")

    @field_validator("full_name")
    @classmethod
    def _full_name(cls, v: str) -> str:
        v = normalize_whitespace(v)
        if not v:
            raise ValueError("Enter your full name")
        return v

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Enter your email address")
        if not _EMAIL.match(v):
            raise ValueError("Enter an email address in the correct format, like name@example.com")
        return v

    @field_validator("organisation")
    @classmethod
    def _organisation(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Select your organisation from the list")
        return v.strip()

    @field_validator("contact_method")
    @classmethod
    def _contact_method(cls, v: str) -> str:
        if v not in _codes(CONTACT_METHODS):
            raise ValueError("Select how you would like to be contacted")
        return v

    @field_validator("country")
    @classmethod
    def _country(cls, v: str) -> str:
        if v not in _codes(COUNTRIES):
            raise ValueError("Select a country")
        return v

    @field_validator("interests")
    @classmethod
    def _interests(cls, v: list[str]) -> list[str]:
        unknown = [i for i in v if i not in _codes(INTERESTS)]
        if unknown:
            raise ValueError(f"Unknown interest: {unknown[0]}")
        return v

    @field_validator("description")
    @classmethod
    def _description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Enter a description")
        if len(v.split()) > DESCRIPTION_MAX_WORDS:
            raise ValueError(f"Description must be {DESCRIPTION_MAX_WORDS} words or fewer")
        return v

    @classmethod
    def blank(cls) -> "ApplicationForm":
        """An unvalidated, empty form for the first page view."""
        return cls.model_construct(
            start_date=DateParts.model_construct(day="", month="", year=""),
            team=[m.model_copy() for m in DEFAULT_TEAM],
        )

    @classmethod
    def redisplay(cls, data: dict[str, Any]) -> "ApplicationForm":
        """Rebuild what the user submitted, unvalidated, for re-rendering."""
        dates = data.get("start_date") or {}
        team = [
            TeamMember.model_construct(
                id=str(row.get("Id", "")),
                name=str(row.get("Name", "")),
                selected=str(row.get("Selected", "")).lower() == "true",
            )
            for row in data.get("team") or []
            if isinstance(row, dict)
        ]
        return cls.model_construct(
            full_name=data.get("full_name", ""),
            email=data.get("email", ""),
            organisation=data.get("organisation", ""),
            contact_method=data.get("contact_method", ""),
            country=data.get("country", ""),
            interests=list(data.get("interests") or []),
            description=data.get("description", ""),
            notes=data.get("notes", ""),
            start_date=DateParts.model_construct(
                day=dates.get("Day", ""), month=dates.get("Month", ""), year=dates.get("Year", "")
            ),
            team=team,
        )


# ── Form body parsing ─────────────────────────────────────────────────────────

_INDEXED = re.compile(r"^(?P<name>[^\[\]]+)\[(?P<index>\d+)\]$")


def nest_form_data(pairs: list[tuple[str, str]], list_fields: set[str] | frozenset[str] = frozenset()) -> dict[str, Any]:
    """Turn flat form pairs into the nested dict pydantic expects.

    ``start_date.Day`` becomes ``{"start_date": {"Day": ...}}``,
    ``team[0].Id`` becomes ``{"team": [{"Id": ...}]}`` and every field named
    in *list_fields* collects all of its values into a list.  Other repeated
    keys keep their last value.
    """
    data: dict[str, Any] = {}
    indexed: dict[str, dict[int, dict[str, Any]]] = {}

    for key, value in pairs:
        if key in list_fields:
            data.setdefault(key, []).append(value)
            continue
        head, _, rest = key.partition(".")
        match = _INDEXED.match(head)
        if match and rest:
            rows = indexed.setdefault(match.group("name"), {})
            rows.setdefault(int(match.group("index")), {})[rest] = value
        elif rest:
            group = data.setdefault(head, {})
            if isinstance(group, dict):
                group[rest] = value
        else:
            data[key] = value

    for name, rows in indexed.items():
        data[name] = [rows[i] for i in sorted(rows)]
    return data
