from fitsocial.users.security import hash_password, verify_password


def test_hash_and_verify():
    hashed = hash_password("secret123", rounds=4)

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)


def test_hash_is_salted():
    assert hash_password("secret123", rounds=4) != hash_password("secret123", rounds=4)


def test_plaintext_stored_value_never_matches():
    # 历史明文记录不会因为"明文相等"而登录成功
    assert not verify_password("secret123", "secret123")
