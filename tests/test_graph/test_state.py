"""Tests for generation workflow state."""

from quizbust.graph.state import create_initial_state


class TestCreateInitialState:
    """Test initial state creation."""

    def test_creates_state_with_subject(self):
        """Test that initial state contains the subject."""
        state = create_initial_state("History")

        assert state["subject"] == "History"

    def test_records_generation(self):
        """Test that the generation tag is kept."""
        state = create_initial_state("History", generation=7)

        assert state["generation"] == 7

    def test_generation_defaults_to_zero(self):
        """Test the default generation."""
        state = create_initial_state("History")

        assert state["generation"] == 0

    def test_results_are_empty_initially(self):
        """Test that nothing has been requested yet."""
        state = create_initial_state("History")

        assert state["raw_reply"] is None
        assert state["question"] is None
        assert state["error"] is None

    def test_state_is_mutable(self):
        """Test that state can be modified."""
        state = create_initial_state("History")

        state["raw_reply"] = "a;b"
        state["error"] = "failed"

        assert state["raw_reply"] == "a;b"
        assert state["error"] == "failed"
