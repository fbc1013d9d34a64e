"""
Tests for the configuration system.
"""

import logging
import threading

import pytest

import polymat
from polymat import (
    ComputeConfig,
    LayoutConfig,
    MaterializeConfig,
    ReadOrder,
    SparseMatrix,
    config,
    get_config,
    set_default_read_order,
    set_tolerance,
)


class TestDefaults:
    """Test default configuration values."""

    def test_defaults(self):
        assert config.layout.default_read_order is ReadOrder.ROW_MAJOR
        assert config.compute.tolerance == 0.0
        assert config.compute.prune_zeros is True
        assert config.materialize.warn_threshold == 1_000_000

    def test_get_config(self):
        assert get_config() is config
        assert polymat.config is config

    def test_to_dict(self):
        data = config.to_dict()
        assert data["layout"]["default_read_order"] == "ROW_MAJOR"
        assert data["compute"] == {"tolerance": 0.0, "prune_zeros": True}
        assert "PolymatConfig(" in repr(config)


class TestGlobalSetters:
    """Test global configuration changes."""

    def test_set_default_read_order(self):
        set_default_read_order(ReadOrder.COL_MAJOR)
        assert config.default_read_order is ReadOrder.COL_MAJOR
        assert SparseMatrix(2, 2).read_order is ReadOrder.COL_MAJOR

    def test_set_tolerance(self):
        set_tolerance(1e-9)
        assert config.tolerance == 1e-9
        with pytest.raises(ValueError):
            set_tolerance(-1.0)

    def test_reset(self):
        set_tolerance(0.5)
        config.reset()
        assert config.tolerance == 0.0

    def test_read_order_flipped(self):
        assert ReadOrder.ROW_MAJOR.flipped() is ReadOrder.COL_MAJOR
        assert ReadOrder.COL_MAJOR.flipped() is ReadOrder.ROW_MAJOR


class TestLocalContext:
    """Test thread-local overrides."""

    def test_local_override(self):
        with config.local(compute=ComputeConfig(tolerance=1e-6)) as cfg:
            assert cfg is config
            assert config.compute.tolerance == 1e-6
        assert config.compute.tolerance == 0.0

    def test_local_restored_on_error(self):
        with pytest.raises(RuntimeError):
            with config.local(layout=LayoutConfig(ReadOrder.COL_MAJOR)):
                raise RuntimeError("boom")
        assert config.layout.default_read_order is ReadOrder.ROW_MAJOR

    def test_nested_local_restores_outer(self):
        """Test leaving an inner context restores the enclosing override."""
        with config.local(compute=ComputeConfig(tolerance=0.5)):
            with config.local(compute=ComputeConfig(tolerance=0.25)):
                assert config.compute.tolerance == 0.25
            assert config.compute.tolerance == 0.5
        assert config.compute.tolerance == 0.0

    def test_nested_local_other_section(self):
        with config.local(compute=ComputeConfig(prune_zeros=False)):
            with config.local(layout=LayoutConfig(ReadOrder.COL_MAJOR)):
                assert config.compute.prune_zeros is False
            assert config.compute.prune_zeros is False
            assert config.layout.default_read_order is ReadOrder.ROW_MAJOR

    def test_reset_drops_local_override(self):
        with config.local(compute=ComputeConfig(tolerance=0.5)):
            config.reset()
            assert config.compute.tolerance == 0.0
        assert config.compute.tolerance == 0.0

    def test_unknown_section(self):
        with pytest.raises(KeyError):
            config.local(kernel=None)

    def test_thread_isolation(self):
        seen = []

        def worker():
            seen.append(config.materialize.warn_threshold)

        with config.local(materialize=MaterializeConfig(warn_threshold=5)):
            assert config.materialize.warn_threshold == 5
            t = threading.Thread(target=worker)
            t.start()
            t.join()
        assert seen == [1_000_000]


class TestCallbacks:
    """Test change callbacks."""

    @pytest.fixture(autouse=True)
    def restore_callbacks(self):
        saved = {name: list(cbs) for name, cbs in config._callbacks.items()}
        yield
        config._callbacks.update(saved)

    def test_on_change(self):
        received = []
        config.on_change("compute", received.append)
        new = ComputeConfig(tolerance=0.1)
        config.compute = new
        assert received == [new]

    def test_on_change_unknown(self):
        with pytest.raises(KeyError):
            config.on_change("nope", print)

    def test_failing_callback_is_logged(self, caplog):
        def broken(value):
            raise RuntimeError("callback failed")

        config.on_change("layout", broken)
        with caplog.at_level(logging.ERROR, logger="polymat.config"):
            config.layout = LayoutConfig()
        assert any("layout" in r.getMessage() for r in caplog.records)
