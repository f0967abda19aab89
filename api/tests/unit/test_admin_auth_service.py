from app.infrastructure.security.admin_auth_service import AdminAuthService


def test_not_configured_rejects_everything() -> None:
    service = AdminAuthService("", "")

    assert service.is_configured() is False
    assert service.verify("", "") is False


def test_partial_configuration_is_not_configured() -> None:
    assert AdminAuthService("admin", "").is_configured() is False


def test_verify_matches_exact_credentials() -> None:
    service = AdminAuthService("admin", "s3cret")

    assert service.verify("admin", "s3cret") is True
    assert service.verify("admin", "S3cret") is False
    assert service.verify("root", "s3cret") is False
    assert service.verify(None, None) is False


def test_verify_handles_non_ascii() -> None:
    service = AdminAuthService("administración", "contraseña")

    assert service.verify("administración", "contraseña") is True
