"""Tests for configuration key translation."""

import pytest

from ongdb_container.core.config_keys import format_configuration_key


class TestFormatConfigurationKey:
    """Test cases for format_configuration_key."""

    def test_dots_and_underscores(self):
        assert format_configuration_key("a.b_c") == "NEO4J_a_b__c"

    def test_deterministic(self):
        assert format_configuration_key("a.b_c") == format_configuration_key("a.b_c")

    @pytest.mark.parametrize("key,expected", [
        ("dbms.security.procedures.unrestricted", "NEO4J_dbms_security_procedures_unrestricted"),
        ("dbms.memory.heap.max_size", "NEO4J_dbms_memory_heap_max__size"),
        ("", "NEO4J_"),
        ("a..b", "NEO4J_a__b"),
        ("a__b", "NEO4J_a____b"),
        ("._", "NEO4J____"),
    ])
    def test_translation(self, key, expected):
        assert format_configuration_key(key) == expected

    def test_prefix_applied_once_per_call(self):
        """Already prefixed or dot-free keys are not special-cased."""
        assert format_configuration_key("plain") == "NEO4J_plain"
        assert format_configuration_key("NEO4J_plain") == "NEO4J_NEO4J__plain"

    def test_not_idempotent(self):
        once = format_configuration_key("a.b_c")
        assert format_configuration_key(once) == "NEO4J_NEO4J__a__b____c"
