"""
Unit tests for the default object factory, object wrapper factory and reflector.
"""

import collections.abc
from dataclasses import dataclass

import pytest

from sqlmap_config.exceptions import InstantiationError
from sqlmap_config.io.vfs import DefaultVFS, ResolverUtil
from sqlmap_config.reflection.object_factory import DefaultObjectFactory, DefaultObjectWrapperFactory
from sqlmap_config.reflection.reflector import DefaultReflectorFactory

from sample_app.domain import User
from sample_app.plugins import NeedsArguments


@dataclass
class Account:
    id: int = 0
    owner: str = ""

    @property
    def label(self):
        return f"{self.id}:{self.owner}"


class TestDefaultObjectFactory:

    def test_creates_concrete_collections(self):
        factory = DefaultObjectFactory()
        assert factory.create(collections.abc.Mapping) == {}
        assert factory.create(collections.abc.Sequence) == []
        assert factory.create(collections.abc.Set) == set()

    def test_constructor_arguments(self):
        assert DefaultObjectFactory().create(User, [3, "ann"]) == User(3, "ann")

    def test_missing_arguments(self):
        with pytest.raises(InstantiationError):
            DefaultObjectFactory().create(NeedsArguments)

    @pytest.mark.parametrize("type_,expected", [
        (list, True), (set, True), (tuple, True), (dict, False), (str, False), (User, False),
    ])
    def test_is_collection(self, type_, expected):
        assert DefaultObjectFactory().is_collection(type_) is expected

    def test_wrapper_factory_has_no_wrappers(self):
        factory = DefaultObjectWrapperFactory()
        assert factory.has_wrapper_for(User()) is False
        with pytest.raises(NotImplementedError):
            factory.get_wrapper_for(User())


class TestReflector:

    def test_properties(self):
        reflector = DefaultReflectorFactory().find_for_class(Account)
        assert reflector.has_setter("owner")
        assert reflector.has_getter("label")
        assert not reflector.has_setter("label")

    def test_class_cache(self):
        factory = DefaultReflectorFactory()
        assert factory.find_for_class(Account) is factory.find_for_class(Account)
        factory.set_class_cache_enabled(False)
        assert not factory.is_class_cache_enabled()
        assert factory.find_for_class(Account) is not factory.find_for_class(Account)


class TestVfs:

    def test_lists_package_and_modules(self):
        names = list(DefaultVFS().list("sample_app"))
        assert names[0] == "sample_app"
        assert "sample_app.mappers" in names
        assert "sample_app.domain" in names

    def test_module_without_submodules(self):
        assert list(DefaultVFS().list("sample_app.domain")) == ["sample_app.domain"]

    def test_resolver_returns_definition_order(self):
        found = ResolverUtil().find("sample_app.mappers", lambda cls: True)
        assert [cls.__name__ for cls in found] == ["UserMapper", "OrderMapper", "MapperSupport"]
