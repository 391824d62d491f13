"""Basic smoke tests for the viva packages."""

def test_imports():
    import console  # noqa: F401
    import practice  # noqa: F401
    import tutor.cli  # noqa: F401
    import viva.events  # noqa: F401
    from config.settings import settings

    assert settings.DB_PATH.endswith(".db")
