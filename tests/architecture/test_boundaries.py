from pytest_archon import archrule


def test_core_independence() -> None:
    """
    The algebra is the foundation: it must not depend on the example
    domain or on any query backend.
    """
    (
        archrule("core_is_independent")
        .match("spec_algebra*")
        .exclude("spec_algebra_movies*")
        .exclude("spec_algebra_sqlalchemy*")
        .should_not_import("spec_algebra_movies*")
        .should_not_import("spec_algebra_sqlalchemy*")
        .should_not_import("sqlalchemy*")
        .check("spec_algebra")
    )


def test_movies_are_backend_agnostic() -> None:
    """
    Movie specifications are plain in-memory leaves with structured
    conditions; translating them is the backend's job.
    """
    (
        archrule("movies_backend_agnostic")
        .match("spec_algebra_movies*")
        .should_not_import("sqlalchemy*")
        .should_not_import("spec_algebra_sqlalchemy*")
        .check("spec_algebra_movies")
    )


def test_translator_does_not_know_the_domain() -> None:
    """The SQLAlchemy translator works on any specification."""
    (
        archrule("translator_domain_free")
        .match("spec_algebra_sqlalchemy*")
        .should_not_import("spec_algebra_movies*")
        .check("spec_algebra_sqlalchemy")
    )
