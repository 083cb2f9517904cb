"""Verify package imports work correctly."""


def test_import_configneat() -> None:
    """Test that configneat can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import configneat

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert configneat.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from configneat import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)
