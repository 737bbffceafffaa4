import importlib


def test_package_exports_domain_api() -> None:
    mod = importlib.import_module("myfast")
    for name in ("start_fast", "end_fast", "init_database", "compute_timer_state", "refresh_goal_progress"):
        assert callable(getattr(mod, name))


def test_cli_entry_point_importable() -> None:
    mod = importlib.import_module("myfast.main")
    assert callable(mod.main)
