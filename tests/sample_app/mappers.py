"""Mapper interfaces bound to the statements in fixtures/mappers/*.xml."""

from abc import ABC, abstractmethod
from typing import List

from .domain import Order, User


class UserMapper(ABC):
    @abstractmethod
    def find_by_id(self, id: int) -> User:
        pass

    @abstractmethod
    def find_all(self) -> List[User]:
        pass

    @abstractmethod
    def insert_user(self, user: User) -> int:
        pass


class OrderMapper(ABC):
    @abstractmethod
    def find_by_user(self, user_id: int) -> List[Order]:
        pass


class MapperSupport:
    """Concrete helper; package scans must not register it as a mapper."""
