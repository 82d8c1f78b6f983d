"""Tests for source and sink registries."""

import pytest

from pdfreflow.core.registry import SinkRegistry, SourceRegistry, _Registry


def test_registered_backends_exist():
    """Verify that the PyMuPDF backends are registered after import."""
    import pdfreflow.sinks.pymupdf  # noqa: F401
    import pdfreflow.sources.pymupdf  # noqa: F401

    assert "pymupdf" in SourceRegistry
    assert "pymupdf" in SinkRegistry
    assert "pymupdf" in SourceRegistry.list()


def test_create_instantiates_registered_class():
    from pdfreflow.sinks.pymupdf import PyMuPDFSink

    sink = SinkRegistry.create("pymupdf")
    assert isinstance(sink, PyMuPDFSink)


def test_unknown_names_report_their_kind():
    with pytest.raises(KeyError, match="Unknown source 'nonexistent'"):
        SourceRegistry.get("nonexistent")
    with pytest.raises(KeyError, match="Unknown sink 'nonexistent'"):
        SinkRegistry.get("nonexistent")


def test_name_cannot_be_rebound_to_another_class():
    registry = _Registry("sink")

    class First:
        pass

    class Second:
        pass

    registry.register("first", First)
    registry.register("first", First)
    with pytest.raises(ValueError, match="already registered"):
        registry.register("first", Second)
    assert registry.list() == ["first"]
