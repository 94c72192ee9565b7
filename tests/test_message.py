"""Tests for the Message model."""

from gcm_sender.models.message import Message


class TestMessage:
    """Tests for payload handling on Message."""

    def test_defaults_have_no_data(self):
        """A bare message carries no options and no payload."""
        message = Message()

        assert message.collapse_key is None
        assert message.delay_while_idle is None
        assert message.time_to_live is None
        assert message.data == {}
        assert message.has_data is False

    def test_has_data_inferred_from_payload(self):
        """Non-empty data implies has_data."""
        message = Message(data={"key1": "value1"})

        assert message.has_data is True

    def test_explicit_has_data_false_is_kept(self):
        """An explicit has_data=False is not overridden by data content."""
        message = Message(data={"key1": "value1"}, has_data=False)

        assert message.has_data is False

    def test_add_data_key_value(self):
        """Adding a single entry sets has_data."""
        message = Message().add_data("key1", "value1")

        assert message.data == {"key1": "value1"}
        assert message.has_data is True

    def test_add_data_mapping_merges(self):
        """Adding a mapping merges into existing data."""
        message = Message(data={"key1": "value1"})
        message.add_data({"key2": "value2", "key1": "changed"})

        assert message.data == {"key1": "changed", "key2": "value2"}
