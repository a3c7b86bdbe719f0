"""Unit tests for UserId value object."""

import pytest

from domain.user.core.value_objects.user_id import UserId


class TestUserId:
    """Test UserId value object."""

    def test_generate_unique(self):
        assert UserId.generate() != UserId.generate()

    def test_generate_is_uuid_string(self):
        user_id = UserId.generate()
        assert len(str(user_id)) == 36

    def test_accepts_valid_uuid(self):
        value = "e4b8c9d0-1234-4678-9abc-def012345678"
        assert UserId(value).value == value

    @pytest.mark.parametrize("value", ["", "not-a-uuid", "1234"])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid UUID format"):
            UserId(value)

    def test_equality_by_value(self):
        value = "e4b8c9d0-1234-4678-9abc-def012345678"
        assert UserId(value) == UserId(value)
        assert hash(UserId(value)) == hash(UserId(value))

    def test_str_and_repr(self):
        value = "e4b8c9d0-1234-4678-9abc-def012345678"
        user_id = UserId(value)

        assert str(user_id) == value
        assert repr(user_id) == f"UserId('{value}')"
