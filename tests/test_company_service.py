import pytest
from fastapi import HTTPException

from jobhub.core.security import verify_password
from jobhub.models.company import Company
from jobhub.models.enums import Role
from jobhub.models.recruitment import Recruitment
from jobhub.models.user import User
from jobhub.schemas.company import CompanyCreate, CompanyFilter, CompanyUpdate
from jobhub.schemas.user import CreateCompanyHRRequest
from jobhub.services.company_service import CompanyService
from tests.factories import make_application, make_company, make_recruitment, make_user, principal


def company_payload(**overrides):
    values = dict(
        code="ACME",
        name="Acme Corp",
        description="Anvils and rockets",
        address="Desert Road 1",
        company_account_email="boss@acme.test",
        company_account_first_name="Wile",
        company_account_last_name="Coyote",
        company_account_password="supersecret1",
    )
    values.update(overrides)
    return CompanyCreate(**values)


def hr_payload(email, **overrides):
    values = dict(email=email, first_name="Hana", last_name="Resources", password="hrpass1")
    values.update(overrides)
    return CreateCompanyHRRequest(**values)


def test_create_company_with_admin(db_session):
    company = CompanyService(db_session).create_company(company_payload())

    admin = db_session.query(User).filter(User.email == "boss@acme.test").one()
    assert admin.role == Role.COMPANY_ADMIN
    assert admin.company_id == company.id
    assert verify_password("supersecret1", admin.password)


def test_create_company_duplicate_code(db_session):
    make_company(db_session, code="ACME")

    with pytest.raises(HTTPException) as exc:
        CompanyService(db_session).create_company(company_payload())

    assert exc.value.status_code == 400
    assert "ACME" in exc.value.detail


def test_create_company_is_atomic(db_session):
    make_user(db_session, email="boss@acme.test")

    with pytest.raises(HTTPException) as exc:
        CompanyService(db_session).create_company(company_payload())

    assert exc.value.status_code == 400
    assert db_session.query(Company).count() == 0


def test_update_company(db_session):
    company = make_company(db_session, code="OLD")

    updated = CompanyService(db_session).update_company(
        company.id, CompanyUpdate(code="NEW", name="New name", description="d", address="a")
    )

    assert updated.code == "NEW"
    assert updated.name == "New name"


def test_update_company_to_taken_code(db_session):
    make_company(db_session, code="TAKEN")
    company = make_company(db_session, code="MINE")

    with pytest.raises(HTTPException) as exc:
        CompanyService(db_session).update_company(
            company.id, CompanyUpdate(code="TAKEN", name="n", description="d", address="a")
        )

    assert exc.value.status_code == 400


def test_delete_company_cascades(db_session):
    company = make_company(db_session)
    admin = make_user(db_session, Role.COMPANY_ADMIN, company)
    recruitment = make_recruitment(db_session, company)
    make_application(db_session, recruitment, make_user(db_session))
    admin_id = admin.id

    CompanyService(db_session).delete_company(company.id)

    assert db_session.query(Company).count() == 0
    assert db_session.query(Recruitment).count() == 0
    assert db_session.query(User).filter(User.id == admin_id).first() is None


def test_find_by_code_not_found(db_session):
    with pytest.raises(HTTPException) as exc:
        CompanyService(db_session).find_by_code("NOPE")

    assert exc.value.status_code == 404


def test_find_all_filters_by_name(db_session):
    make_company(db_session, name="Globex")
    make_company(db_session, name="Initech")

    page = CompanyService(db_session).find_all(CompanyFilter(name="Glob"))

    assert page.total == 1
    assert page.items[0].name.startswith("Globex")


def test_create_and_list_company_hr(db_session):
    company = make_company(db_session)
    admin = make_user(db_session, Role.COMPANY_ADMIN, company)
    service = CompanyService(db_session)

    created = service.create_company_hr([hr_payload("hr1@acme.test"), hr_payload("hr2@acme.test")], principal(admin))

    assert [u.role for u in created] == [Role.COMPANY_HR, Role.COMPANY_HR]
    assert {u.email for u in service.get_company_hr_list(principal(admin))} == {"hr1@acme.test", "hr2@acme.test"}


def test_create_company_hr_duplicate_email_rolls_back(db_session):
    company = make_company(db_session)
    admin = make_user(db_session, Role.COMPANY_ADMIN, company)

    with pytest.raises(HTTPException) as exc:
        CompanyService(db_session).create_company_hr(
            [hr_payload("same@acme.test"), hr_payload("same@acme.test")], principal(admin)
        )

    assert exc.value.status_code == 400
    assert db_session.query(User).filter(User.role == Role.COMPANY_HR).count() == 0


def test_company_hr_requires_company_admin(db_session):
    company = make_company(db_session)
    hr = make_user(db_session, Role.COMPANY_HR, company)

    with pytest.raises(HTTPException) as exc:
        CompanyService(db_session).get_company_hr_list(principal(hr))

    assert exc.value.status_code == 403


def test_company_hr_actor_reconfirmed(db_session):
    company = make_company(db_session)
    admin = make_user(db_session, Role.COMPANY_ADMIN, company)
    stale = principal(admin)
    admin.role = Role.COMPANY_HR
    db_session.commit()

    with pytest.raises(HTTPException) as exc:
        CompanyService(db_session).create_company_hr([hr_payload("x@acme.test")], stale)

    assert exc.value.status_code == 403


def test_delete_company_hr(db_session):
    company = make_company(db_session)
    admin = make_user(db_session, Role.COMPANY_ADMIN, company)
    hr = make_user(db_session, Role.COMPANY_HR, company)
    hr_id = hr.id

    CompanyService(db_session).delete_company_hr(hr_id, principal(admin))

    assert db_session.query(User).filter(User.id == hr_id).first() is None


def test_delete_company_hr_of_other_company(db_session):
    admin = make_user(db_session, Role.COMPANY_ADMIN, make_company(db_session))
    foreign_hr = make_user(db_session, Role.COMPANY_HR, make_company(db_session))

    with pytest.raises(HTTPException) as exc:
        CompanyService(db_session).delete_company_hr(foreign_hr.id, principal(admin))

    assert exc.value.status_code == 404
    assert db_session.query(User).filter(User.id == foreign_hr.id).first() is not None


def test_delete_company_hr_refuses_admin_accounts(db_session):
    company = make_company(db_session)
    admin = make_user(db_session, Role.COMPANY_ADMIN, company)
    co_admin = make_user(db_session, Role.COMPANY_ADMIN, company)

    with pytest.raises(HTTPException) as exc:
        CompanyService(db_session).delete_company_hr(co_admin.id, principal(admin))

    assert exc.value.status_code == 404
