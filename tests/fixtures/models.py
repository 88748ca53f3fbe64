"""
Models exercised by the matcher tests.

SQLAlchemy declarative classes validate through ``@validates`` hooks;
pydantic models validate through field validators.
"""
import hashlib
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from sqlalchemy import ARRAY, JSON, Column, ForeignKey, Integer, PickleType, String, Table, Text
from sqlalchemy.ext.mutable import MutableDict, MutableList
from sqlalchemy.orm import Mapped, declarative_base, mapped_column, relationship, validates

Base = declarative_base()


def _require(value, message="can't be blank"):
    if not value:
        raise ValueError(message)
    return value


parent_tags = Table(
    "parent_tags",
    Base.metadata,
    Column("parent_id", Integer, ForeignKey("parents.id"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id"), primary_key=True),
)


class Parent(Base):
    __tablename__ = "parents"
    id = Column(Integer, primary_key=True)
    name = Column(String(255))
    motto = Column(Text)
    nickname = Column(String(50))
    rank = Column(String(50))

    children = relationship("Child", back_populates="parent")
    tags = relationship("Tag", secondary=parent_tags)
    badges = relationship("Badge", collection_class=set)
    profile = relationship("Profile", uselist=False)

    @validates("name")
    def _validate_name(self, key, value):
        return _require(value)

    @validates("motto")
    def _validate_motto(self, key, value):
        return _require(value, "Parent needs a motto")

    @validates("nickname")
    def _normalize_nickname(self, key, value):
        # stores blank input as an empty string
        return (value or "").strip()

    @validates("rank")
    def _default_rank(self, key, value):
        return value or "private"


class Child(Base):
    __tablename__ = "children"
    id = Column(Integer, primary_key=True)
    parent_id = Column(Integer, ForeignKey("parents.id"), nullable=False)

    parent = relationship("Parent", back_populates="children")


class Tag(Base):
    __tablename__ = "tags"
    id = Column(Integer, primary_key=True)
    label = Column(String(50), nullable=False)


class Badge(Base):
    __tablename__ = "badges"
    id = Column(Integer, primary_key=True)
    parent_id = Column(Integer, ForeignKey("parents.id"))


class Profile(Base):
    __tablename__ = "profiles"
    id = Column(Integer, primary_key=True)
    parent_id = Column(Integer, ForeignKey("parents.id"))


class Document(Base):
    __tablename__ = "documents"
    id = Column(Integer, primary_key=True)
    title = Column(String(255))
    settings: Mapped[dict] = mapped_column(MutableDict.as_mutable(JSON), default=dict)
    labels: Mapped[list[str]] = mapped_column(MutableList.as_mutable(JSON), default=list)
    payload: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    blob = Column(PickleType)
    codes = Column(ARRAY(String))

    @validates("settings")
    def _validate_settings(self, key, value):
        return _require(value)


class Team(Base):
    __tablename__ = "teams"
    id = Column(Integer, primary_key=True)

    members = relationship("Member")

    @validates("members", include_removes=True)
    def _validate_members(self, key, value, is_remove):
        # per-item on append/remove, whole collection when re-validated
        if not is_remove and not value:
            raise ValueError("can't be blank")
        return value


class Member(Base):
    __tablename__ = "members"
    id = Column(Integer, primary_key=True)
    team_id = Column(Integer, ForeignKey("teams.id"))


def _digest(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class User(Base):
    """Secure password model: the setter never stores a blank password."""

    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    email = Column(String(255))
    password_digest = Column(String(64))

    @property
    def password(self):
        return getattr(self, "_password", None)

    @password.setter
    def password(self, value):
        if value is None:
            self.password_digest = None
        elif value:
            self._password = value
            self.password_digest = _digest(value)


class Credential(Base):
    """Plain password column; not a secure password."""

    __tablename__ = "credentials"
    id = Column(Integer, primary_key=True)
    password = Column(String(255))
    password_digest = Column(String(64))

    @validates("password")
    def _validate_password(self, key, value):
        return _require(value)


class RobotSchema(BaseModel):
    arms: Optional[str] = None
    legs: Optional[int] = None
    tags: list[str] = []
    settings: dict[str, str] = {}
    serial: str = "unassigned"
    nickname: Optional[str] = None

    @field_validator("arms", "tags", "settings")
    @classmethod
    def _present(cls, value):
        return _require(value)

    @field_validator("legs")
    @classmethod
    def _legs_present(cls, value):
        if value is None:
            raise ValueError("Robot has no legs")
        return value


class AccountSchema(BaseModel):
    handle: Optional[str] = None

    @field_validator("handle")
    @classmethod
    def _handle_on_create(cls, value, info: ValidationInfo):
        if (info.context or {}).get("on") == "create" and not value:
            raise ValueError("can't be blank")
        return value


class StrictRobotSchema(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    arms: str


class TrimmedSchema(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    title: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


class AliasedRobotSchema(BaseModel):
    arms: Optional[str] = Field(None, alias="armCount")

    @field_validator("arms")
    @classmethod
    def _arms_present(cls, value):
        return _require(value)
