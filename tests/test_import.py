"""Verify package imports work correctly."""


def test_import_xmldelta() -> None:
    """Test that xmldelta can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import xmldelta

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert xmldelta.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from xmldelta import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_api_exported() -> None:
    """Every name in __all__ resolves."""
    import xmldelta

    for name in xmldelta.__all__:
        assert hasattr(xmldelta, name), name
