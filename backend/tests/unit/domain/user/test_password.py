"""Unit tests for Password value object."""

import pytest

from domain.user.core.exceptions.user_errors import InvalidPasswordError
from domain.user.core.value_objects.password import Password


class TestPasswordCreate:
    """Test hashing of new passwords."""

    @pytest.mark.asyncio
    async def test_create_hashes_plaintext(self):
        password = await Password.create("validpassword123")

        assert password.hash != "validpassword123"
        assert password.hash.startswith("$2")

    @pytest.mark.asyncio
    async def test_same_plaintext_gives_different_hashes(self):
        first = await Password.create("validpassword123")
        second = await Password.create("validpassword123")

        assert first.hash != second.hash

    @pytest.mark.asyncio
    async def test_minimum_length_accepted(self):
        password = await Password.create("a" * 8)
        assert await password.verify("a" * 8) is True

    @pytest.mark.asyncio
    async def test_maximum_length_accepted(self):
        password = await Password.create("a" * 100)
        assert await password.verify("a" * 100) is True

    @pytest.mark.asyncio
    async def test_too_short(self):
        with pytest.raises(InvalidPasswordError) as exc_info:
            await Password.create("a" * 7)

        assert exc_info.value.message == "Password must be at least 8 characters long"

    @pytest.mark.asyncio
    async def test_too_long(self):
        with pytest.raises(InvalidPasswordError) as exc_info:
            await Password.create("a" * 101)

        assert exc_info.value.message == "Password must be less than 100 characters"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("plaintext", ["", None, 12345678])
    async def test_missing(self, plaintext):
        with pytest.raises(InvalidPasswordError) as exc_info:
            await Password.create(plaintext)

        assert exc_info.value.message == "Password is required"

    @pytest.mark.asyncio
    async def test_multibyte_password_over_72_bytes(self):
        plaintext = "é" * 60  # 120 bytes in UTF-8
        password = await Password.create(plaintext)

        assert await password.verify(plaintext) is True


class TestPasswordVerify:
    """Test verification against stored hashes."""

    @pytest.mark.asyncio
    async def test_verify_correct(self):
        password = await Password.create("validpassword123")
        assert await password.verify("validpassword123") is True

    @pytest.mark.asyncio
    async def test_verify_wrong(self):
        password = await Password.create("validpassword123")
        assert await password.verify("wrongpassword") is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("candidate", ["", None, 123])
    async def test_verify_bad_input_returns_false(self, candidate):
        password = await Password.create("validpassword123")
        assert await password.verify(candidate) is False

    @pytest.mark.asyncio
    async def test_verify_malformed_hash_returns_false(self):
        password = Password.from_hash("not-a-bcrypt-hash")
        assert await password.verify("validpassword123") is False

    @pytest.mark.asyncio
    async def test_from_hash_round_trip(self):
        original = await Password.create("validpassword123")
        restored = Password.from_hash(original.hash)

        assert restored == original
        assert await restored.verify("validpassword123") is True

    def test_from_hash_rejects_empty(self):
        with pytest.raises(InvalidPasswordError) as exc_info:
            Password.from_hash("")

        assert exc_info.value.message == "Password hash is required"

    @pytest.mark.asyncio
    async def test_verify_dummy_never_raises(self):
        assert await Password.verify_dummy("anything") is None
        assert await Password.verify_dummy(None) is None

    @pytest.mark.asyncio
    async def test_repr_hides_hash(self):
        password = await Password.create("validpassword123")

        assert repr(password) == "Password('***')"
        assert password.hash not in repr(password)
