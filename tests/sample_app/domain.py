"""Domain types registered through <typeAliases><package name="sample_app.domain"/>."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from sqlmap_config.type.annotations import alias, no_alias


@alias("Member")
@dataclass
class User:
    id: int = 0
    user_name: str = ""


@dataclass
class Order:
    id: int = 0
    user_id: int = 0


@no_alias
class AuditRecord:
    pass


class _Cache:
    pass


class Shape(ABC):
    @abstractmethod
    def area(self) -> float:
        pass


class Status(Enum):
    ACTIVE = "A"
    CLOSED = "C"
