"""
Tests for the forced collection capability.
"""
import gc

import pytest

from watchbench.services import collector
from watchbench.services.collector import CollectionUnavailableError


def test_force_collection_runs():
    assert collector.is_available()
    assert collector.force_collection() >= 0


def test_missing_collection_is_fatal(monkeypatch):
    """Without gc.collect the benchmark cannot establish a baseline."""
    monkeypatch.delattr(gc, "collect")
    
    assert not collector.is_available()
    with pytest.raises(CollectionUnavailableError):
        collector.force_collection()
