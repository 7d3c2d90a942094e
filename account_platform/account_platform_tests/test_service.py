"""Tests for AuthService against an in-memory database."""
from account_platform.account_platform.account_service.errors import ErrorKind
from account_platform.account_platform.account_service.models import UserAccount, UserProfile
from account_platform.account_platform.account_service.repository import AccountRepository
from account_platform.account_platform.account_service.service import AuthService


def register(service, **overrides):
    data = {"name": "A", "username": "ab1", "email": "a@x.com", "password": "password1"}
    data.update(overrides)
    return service.register_account(**data)


def test_register_creates_account_and_empty_profile(service, db_session, codec):
    result = register(service)
    assert result.is_ok

    account = db_session.query(UserAccount).filter(UserAccount.id == result.value.account_id).one()
    assert account.email == "a@x.com"
    assert account.is_deleted is False
    assert account.password != "password1"

    profile = db_session.query(UserProfile).filter(UserProfile.user_account_id == account.id).one()
    assert profile.to_dict() == {"bio": "", "country": "", "state": "", "city": "", "avatarUrl": ""}

    claims = codec.verify(result.value.token).value
    assert claims.subject_id == account.id
    assert claims.email == "a@x.com"


def test_register_rejects_duplicate_email_or_username(service, db_session):
    assert register(service).is_ok

    same_email = register(service, username="other")
    same_username = register(service, email="b@x.com")

    assert same_email.error.kind == ErrorKind.DUPLICATE_ACCOUNT
    assert same_username.error.kind == ErrorKind.DUPLICATE_ACCOUNT
    assert db_session.query(UserAccount).count() == 1
    assert db_session.query(UserProfile).count() == 1


def test_register_lookup_is_case_sensitive(service):
    assert register(service).is_ok
    assert register(service, username="AB1", email="A@x.com").is_ok


def test_unique_index_violation_maps_to_duplicate(db_session, hasher, codec):
    class SkipLookupRepository(AccountRepository):
        def find_by_email_or_username(self, email, username):
            return None

    racing = AuthService(SkipLookupRepository(db_session), hasher, codec)
    assert register(racing).is_ok

    result = register(racing, username="someone-else")
    assert result.error.kind == ErrorKind.DUPLICATE_ACCOUNT
    assert db_session.query(UserAccount).count() == 1
    assert db_session.query(UserProfile).count() == 1


def test_login_success_returns_verifiable_token(service, codec):
    account_id = register(service).value.account_id

    result = service.login("a@x.com", "password1")
    assert result.is_ok
    assert result.value.account_id == account_id
    assert codec.verify(result.value.token).value.subject_id == account_id


def test_login_failures_are_indistinguishable(service):
    register(service)

    wrong_password = service.login("a@x.com", "wrong-password")
    unknown_email = service.login("nobody@x.com", "password1")

    assert wrong_password.error.kind == ErrorKind.INVALID_CREDENTIALS
    assert wrong_password.error == unknown_email.error


def test_login_ignores_soft_deleted_accounts(service, db_session):
    account_id = register(service).value.account_id
    account = db_session.get(UserAccount, account_id)
    account.is_deleted = True
    db_session.commit()

    assert service.login("a@x.com", "password1").error.kind == ErrorKind.INVALID_CREDENTIALS


def test_update_profile_changes_only_given_fields(service):
    account_id = register(service).value.account_id
    service.update_profile(account_id, {"country": "NZ", "city": "Wellington"})

    result = service.update_profile(account_id, {"bio": "x"})
    assert result.is_ok

    profile = service.get_profile(account_id).value
    assert profile.bio == "x"
    assert profile.country == "NZ"
    assert profile.city == "Wellington"
    assert profile.state == ""


def test_update_profile_null_clears_and_unknown_keys_ignored(service):
    account_id = register(service).value.account_id
    service.update_profile(account_id, {"bio": "hello"})

    result = service.update_profile(account_id, {"bio": None, "email": "evil@x.com"})
    assert result.is_ok
    assert result.value.bio == ""
    assert service.login("a@x.com", "password1").is_ok


def test_update_profile_for_unknown_account(service):
    result = service.update_profile("missing-account", {"bio": "x"})
    assert result.error.kind == ErrorKind.PROFILE_NOT_FOUND
    assert service.get_profile("missing-account").error.kind == ErrorKind.PROFILE_NOT_FOUND
