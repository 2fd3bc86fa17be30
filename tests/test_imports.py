def test_import_fortbattle_package() -> None:
    import importlib

    module = importlib.import_module("fortbattle")
    assert module is not None


def test_import_rng_no_side_effects() -> None:
    from fortbattle.core.rng import RNG

    rng = RNG(42)
    value = rng.randint(0, 1)
    assert value in (0, 1)


def test_import_service_layer() -> None:
    from fortbattle.services import BattleService, InMemoryPlayerRepository

    assert BattleService is not None
    assert InMemoryPlayerRepository is not None
