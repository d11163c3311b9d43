"""Tests for diagnostic and metric types."""

import pytest

from emmet_expression_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)


class TestDiagnosticEntry:
    """Test DiagnosticEntry validation."""

    def test_creation(self):
        """Test a diagnostic entry with all fields."""
        entry = DiagnosticEntry(
            severity=DiagnosticSeverity.WARNING,
            message="Nodes were discarded",
            component="tree_builder",
            position=3,
            details={"discarded": 1},
            correlation_id="req-1",
        )
        assert entry.severity == DiagnosticSeverity.WARNING
        assert entry.position == 3
        assert entry.timestamp > 0

    def test_empty_message_raises_error(self):
        """Test an empty message is rejected."""
        with pytest.raises(ValueError, match="message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "tree_builder")

    def test_empty_component_raises_error(self):
        """Test an empty component is rejected."""
        with pytest.raises(ValueError, match="component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "message", "")

    def test_severities_are_ordered(self):
        """Test severity values increase with importance."""
        values = [severity.value for severity in DiagnosticSeverity]
        assert values == sorted(values)
        assert DiagnosticSeverity.ERROR.value > DiagnosticSeverity.WARNING.value


class TestPerformanceMetrics:
    """Test PerformanceMetrics derived values."""

    def test_defaults(self):
        """Test metrics start at zero."""
        metrics = PerformanceMetrics()
        assert metrics.processing_time_ms == 0.0
        assert metrics.characters_per_second == 0.0
        assert metrics.nodes_per_token == 0.0

    def test_derived_rates(self):
        """Test throughput and node ratio calculations."""
        metrics = PerformanceMetrics(
            processing_time_ms=500.0,
            characters_processed=1000,
            tokens_generated=8,
            nodes_built=4,
        )
        assert metrics.characters_per_second == 2000.0
        assert metrics.nodes_per_token == 0.5
