"""Unit tests for the table definitions."""

import pytest

from agora.persistence.tables import karma_events_table, user_karma_table


class TestLedgerForeignKeys:
    """Deleting a user must not silently drop karma history."""

    @pytest.mark.parametrize("table", [user_karma_table, karma_events_table])
    def test_user_delete_is_restricted(self, table):
        [foreign_key] = table.c.user_id.foreign_keys

        assert foreign_key.column.table.name == "users"
        assert foreign_key.ondelete == "RESTRICT"
