"""
Tests for bcrypt password hashing.
"""

from auth.password import burn_password_check, hash_password, verify_password


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("Str0ng!Pass")
        assert hashed != "Str0ng!Pass"
        assert "Str0ng!Pass" not in hashed

    def test_verify_correct_and_wrong(self):
        hashed = hash_password("Str0ng!Pass")
        assert verify_password("Str0ng!Pass", hashed)
        assert not verify_password("Str0ng!Pas", hashed)

    def test_salted_per_call(self):
        assert hash_password("Str0ng!Pass") != hash_password("Str0ng!Pass")

    def test_malformed_hash_is_false(self):
        assert verify_password("Str0ng!Pass", "not-a-bcrypt-hash") is False

    def test_burn_check_returns_nothing(self):
        assert burn_password_check("anything") is None
