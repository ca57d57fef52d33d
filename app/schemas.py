"""
app/schemas.py — Request / response models
==========================================
One pydantic model per record kind, shared by the public site API and the
admin API. JSON uses camelCase (``fieldOfStudy``, ``displayOrder``); rows
from db.models use snake_case and validate through ``populate_by_name``.

The camelCase alias of a field is also the ``field_name`` its translations
are stored under, so ``Education.field_of_study`` is translated via
``fieldOfStudy``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class About(CamelModel):
    id: Optional[int] = None
    name: str = Field(min_length=2, max_length=100)
    title: str = Field(min_length=2, max_length=150)
    description: str = Field(min_length=10, max_length=2000)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(default=None, max_length=20)
    location: Optional[str] = Field(default=None, max_length=200)
    linkedin_url: Optional[str] = Field(default=None, max_length=500)
    github_url: Optional[str] = Field(default=None, max_length=500)
    twitter_url: Optional[str] = Field(default=None, max_length=500)
    resume_url: Optional[str] = Field(default=None, max_length=500)
    profile_image_url: Optional[str] = Field(default=None, max_length=500)


class Project(CamelModel):
    id: Optional[int] = None
    title: str = Field(min_length=2, max_length=200)
    description: str = Field(min_length=10, max_length=2000)
    image_url: Optional[str] = Field(default=None, max_length=500)
    demo_url: Optional[str] = Field(default=None, max_length=500)
    github_url: Optional[str] = Field(default=None, max_length=500)
    technologies: list[str] = Field(default_factory=list)
    category: Optional[str] = Field(default=None, max_length=100)
    featured: bool = False
    display_order: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Skill(CamelModel):
    id: Optional[int] = None
    name: str = Field(min_length=1, max_length=100)
    category: Optional[str] = Field(default=None, max_length=100)
    proficiency_level: Optional[int] = Field(default=None, ge=0, le=100)
    icon_url: Optional[str] = Field(default=None, max_length=500)
    display_order: Optional[int] = None


class Experience(CamelModel):
    id: Optional[int] = None
    company: str = Field(min_length=2, max_length=200)
    position: str = Field(min_length=2, max_length=200)
    location: Optional[str] = Field(default=None, max_length=200)
    start_date: str = Field(max_length=50)
    end_date: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = Field(default=None, max_length=2000)
    current: bool = False
    display_order: Optional[int] = None


class Education(CamelModel):
    id: Optional[int] = None
    institution: str = Field(min_length=2, max_length=200)
    degree: str = Field(min_length=2, max_length=200)
    field_of_study: Optional[str] = Field(default=None, max_length=200)
    location: Optional[str] = Field(default=None, max_length=200)
    start_date: str = Field(max_length=50)
    end_date: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = Field(default=None, max_length=2000)
    grade: Optional[str] = Field(default=None, max_length=20)
    display_order: Optional[int] = None


class Language(CamelModel):
    id: Optional[int] = None
    name: str = Field(min_length=2, max_length=100)
    proficiency: str = Field(min_length=2, max_length=50)
    proficiency_percentage: Optional[int] = Field(default=None, ge=0, le=100)
    display_order: Optional[int] = None


class Interest(CamelModel):
    id: Optional[int] = None
    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    icon: Optional[str] = Field(default=None, max_length=100)
    display_order: Optional[int] = None


class ContactMessageIn(CamelModel):
    name: str = Field(min_length=2, max_length=100)
    email: str = Field(pattern=EMAIL_PATTERN)
    subject: str = Field(min_length=3, max_length=200)
    message: str = Field(min_length=10, max_length=2000)


class ContactMessage(CamelModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    status: str
    created_at: str
    read_at: Optional[str] = None


class TranslationUpdate(BaseModel):
    fields: dict[str, str]


# record kind (db.models.RECORD_KINDS key) → response model
RECORD_MODELS: dict[str, type[CamelModel]] = {
    "about":       About,
    "projects":    Project,
    "skills":      Skill,
    "experiences": Experience,
    "education":   Education,
    "languages":   Language,
    "interests":   Interest,
}


def to_model(kind: str, row: Optional[dict]) -> Optional[CamelModel]:
    """Validate a db row into the response model of its kind."""
    if row is None:
        return None
    return RECORD_MODELS[kind].model_validate(row)


def dump(obj):
    """camelCase JSON-ready form of a model, a list of models, or a passthrough."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(by_alias=True)
    if isinstance(obj, list):
        return [dump(o) for o in obj]
    return obj
