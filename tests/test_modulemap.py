import pytest

from domekit.modulemap import ForeignClassMethods, ModuleMap, ModuleMapError


def noop(*args):
    return None


def other(*args):
    return 1


@pytest.fixture
def modules():
    registry = ModuleMap()
    registry.add_module("game", "class Game {}")
    return registry


def test_source_round_trip(modules):
    assert modules.get_source("game") == "class Game {}"
    assert "game" in modules


def test_unknown_module_has_no_source(modules):
    assert modules.get_source("random") is None


def test_duplicate_module_rejected(modules):
    with pytest.raises(ModuleMapError):
        modules.add_module("game", "other")
    assert modules.get_source("game") == "class Game {}"


def test_function_binding(modules):
    modules.add_function("game", "static run()", noop)
    assert modules.get_function("game", "static run()") is noop
    assert modules.get_function("game", "static stop()") is None
    assert modules.get_function("missing", "static run()") is None


def test_latest_function_binding_wins(modules):
    modules.add_function("game", "f()", noop)
    modules.add_function("game", "f()", other)
    assert modules.get_function("game", "f()") is other


def test_class_binding(modules):
    modules.add_class("game", "Sprite", noop, other)
    methods = modules.get_class_methods("game", "Sprite")
    assert methods == ForeignClassMethods(noop, other)
    assert modules.get_class_methods("game", "Other") is None
    assert modules.get_class_methods("missing", "Sprite") is None


def test_binding_to_missing_module_fails():
    registry = ModuleMap()
    with pytest.raises(ModuleMapError):
        registry.add_function("nowhere", "f()", noop)
    with pytest.raises(ModuleMapError):
        registry.add_class("nowhere", "C", noop, noop)


def test_locked_module_rejects_bindings(modules):
    modules.add_function("game", "f()", noop)
    modules.lock_module("game")
    with pytest.raises(ModuleMapError):
        modules.add_function("game", "g()", noop)
    with pytest.raises(ModuleMapError):
        modules.add_class("game", "C", noop, noop)
    assert modules.get_function("game", "f()") is noop
    assert modules.get_function("game", "g()") is None


def test_lock_unknown_module_is_ignored(modules):
    modules.lock_module("missing")
    assert "missing" not in modules