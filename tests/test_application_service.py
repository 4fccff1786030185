from datetime import timedelta

import pytest
from fastapi import HTTPException
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError

from jobhub.core.constants import QueueName
from jobhub.core.utils import as_utc, utcnow
from jobhub.models.application import Application
from jobhub.models.enums import ApplicationStatus, Role
from jobhub.schemas.application import ApplicationCreate, ApplicationFilter, ApplicationUpdate
from jobhub.services.application_service import ApplicationService
from jobhub.services.file_service import FileService
from tests.factories import (
    make_application,
    make_company,
    make_file,
    make_recruitment,
    make_user,
    principal,
)


@pytest.fixture
def world(db_session):
    company = make_company(db_session)
    other_company = make_company(db_session)
    return {
        "company": company,
        "other_company": other_company,
        "admin": make_user(db_session, Role.COMPANY_ADMIN, company, first_name="Ada", last_name="Admin"),
        "hr": make_user(db_session, Role.COMPANY_HR, company, first_name="Hal", last_name="Hr"),
        "outsider": make_user(db_session, Role.COMPANY_ADMIN, other_company),
        "applicant": make_user(db_session, Role.USER, first_name="Una", last_name="User"),
        "recruitment": make_recruitment(db_session, company),
    }


def apply(db_session, world, **overrides):
    cv = overrides.pop("cv", None) or make_file(db_session, world["applicant"])
    data = ApplicationCreate(
        message=overrides.pop("message", "Please consider me"),
        cv_id=overrides.pop("cv_id", cv.id),
        recruitment_id=overrides.pop("recruitment_id", world["recruitment"].id),
    )
    user_id = overrides.pop("user_id", world["applicant"].id)
    return ApplicationService(db_session).create(data, user_id)


# --- create ---

def test_create_application_is_pending(db_session, world):
    cv = make_file(db_session, world["applicant"])

    application = apply(db_session, world, cv=cv)

    assert application.status == ApplicationStatus.PENDING
    assert application.user_id == world["applicant"].id
    assert application.recruitment_id == world["recruitment"].id
    assert application.cv_id == cv.id


def test_create_application_twice_is_rejected(db_session, world):
    apply(db_session, world)

    with pytest.raises(HTTPException) as exc:
        apply(db_session, world)

    assert exc.value.status_code == 400
    assert "already applied" in exc.value.detail
    assert "Una User" in exc.value.detail


def test_create_application_unknown_user(db_session, world):
    with pytest.raises(HTTPException) as exc:
        apply(db_session, world, user_id=9999)

    assert exc.value.status_code == 400
    assert "9999" in exc.value.detail


@pytest.mark.parametrize("role_key", ["admin", "hr"])
def test_create_application_requires_user_role(db_session, world, role_key):
    with pytest.raises(HTTPException) as exc:
        apply(db_session, world, user_id=world[role_key].id)

    assert exc.value.status_code == 403


def test_create_application_unknown_recruitment(db_session, world):
    with pytest.raises(HTTPException) as exc:
        apply(db_session, world, recruitment_id=9999)

    assert exc.value.status_code == 400
    assert exc.value.detail == "Recruitment not found"


def test_create_application_after_deadline(db_session, world):
    expired = make_recruitment(db_session, world["company"], deadline=utcnow() - timedelta(minutes=1))

    with pytest.raises(HTTPException) as exc:
        apply(db_session, world, recruitment_id=expired.id)

    assert exc.value.status_code == 400
    assert exc.value.detail == "Recruitment deadline has passed"


def test_deadline_is_checked_before_cv(db_session, world):
    expired = make_recruitment(db_session, world["company"], deadline=utcnow() - timedelta(days=1))

    with pytest.raises(HTTPException) as exc:
        apply(db_session, world, recruitment_id=expired.id, cv_id="missing-cv")

    assert exc.value.detail == "Recruitment deadline has passed"


def test_create_application_unknown_cv(db_session, world):
    with pytest.raises(HTTPException) as exc:
        apply(db_session, world, cv_id="missing-cv")

    assert exc.value.status_code == 400
    assert "missing-cv" in exc.value.detail


def test_store_rejects_duplicate_pair(db_session, world):
    make_application(db_session, world["recruitment"], world["applicant"])

    db_session.add(Application(
        message="again",
        status=ApplicationStatus.PENDING,
        recruitment_id=world["recruitment"].id,
        user_id=world["applicant"].id,
    ))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_concurrent_duplicate_is_reported_as_already_applied(db_session, world):
    cv = make_file(db_session, world["applicant"])
    recruitment_id, user_id = world["recruitment"].id, world["applicant"].id

    def competing_request(session, flush_context, instances):
        session.add(Application(
            message="from another request",
            status=ApplicationStatus.PENDING,
            recruitment_id=recruitment_id,
            user_id=user_id,
        ))

    event.listen(db_session, "before_flush", competing_request, once=True)

    with pytest.raises(HTTPException) as exc:
        apply(db_session, world, cv=cv)

    assert exc.value.status_code == 400
    assert exc.value.detail == "User 'Una User' has already applied for this recruitment"
    assert db_session.query(Application).count() == 0


def test_create_application_exactly_at_deadline(db_session, world, monkeypatch):
    deadline = as_utc(world["recruitment"].deadline)
    monkeypatch.setattr("jobhub.services.application_service.utcnow", lambda: deadline)

    application = apply(db_session, world)

    assert application.status == ApplicationStatus.PENDING


def test_create_application_just_after_deadline(db_session, world, monkeypatch):
    deadline = as_utc(world["recruitment"].deadline)
    monkeypatch.setattr(
        "jobhub.services.application_service.utcnow", lambda: deadline + timedelta(microseconds=1)
    )

    with pytest.raises(HTTPException) as exc:
        apply(db_session, world)

    assert exc.value.status_code == 400
    assert exc.value.detail == "Recruitment deadline has passed"


# --- applicant view ---

def test_find_by_recruitment_and_user_resolves_cv_url(db_session, world, s3_service):
    created = apply(db_session, world)
    service = ApplicationService(db_session, FileService(db_session, s3_service))

    detail = service.find_by_recruitment_and_user(world["recruitment"].id, principal(world["applicant"]))

    assert detail.id == created.id
    assert detail.cv_url
    assert detail.recruitment.id == world["recruitment"].id


def test_find_by_recruitment_and_user_not_applied(db_session, world, s3_service):
    service = ApplicationService(db_session, FileService(db_session, s3_service))

    with pytest.raises(HTTPException) as exc:
        service.find_by_recruitment_and_user(world["recruitment"].id, principal(world["applicant"]))

    assert exc.value.status_code == 404
    assert "Una User" in exc.value.detail


# --- staff list ---

def test_find_by_recruitment_lists_applications(db_session, world):
    other = make_user(db_session)
    make_application(db_session, world["recruitment"], world["applicant"])
    make_application(db_session, world["recruitment"], other)

    applications = ApplicationService(db_session).find_by_recruitment(
        world["recruitment"].id, principal(world["hr"])
    )

    assert [a.user_id for a in applications] == [world["applicant"].id, other.id]


def test_find_by_recruitment_other_company(db_session, world):
    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session).find_by_recruitment(world["recruitment"].id, principal(world["outsider"]))

    assert exc.value.status_code == 403
    assert exc.value.detail == "Recruitment does not belong to your company"


def test_find_by_recruitment_uses_stored_company(db_session, world):
    # the token still claims the company, the store no longer does
    stale = principal(world["hr"])
    world["hr"].company_id = None
    db_session.commit()

    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session).find_by_recruitment(world["recruitment"].id, stale)

    assert exc.value.status_code == 403


def test_find_by_recruitment_unknown_actor(db_session, world):
    ghost = principal(world["hr"]).model_copy(update={"id": 9999})

    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session).find_by_recruitment(world["recruitment"].id, ghost)

    assert exc.value.status_code == 401


def test_find_by_recruitment_unknown_recruitment(db_session, world):
    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session).find_by_recruitment(9999, principal(world["admin"]))

    assert exc.value.status_code == 404


# --- staff detail ---

def test_get_application_detail(db_session, world, s3_service):
    cv = make_file(db_session, world["applicant"])
    application = make_application(db_session, world["recruitment"], world["applicant"], cv)
    service = ApplicationService(db_session, FileService(db_session, s3_service))

    detail = service.get_application_detail(application.id, principal(world["admin"]))

    assert detail.id == application.id
    assert detail.cv_url == f"https://files.example.com/{cv.key}?signature=abc"
    assert detail.user.id == world["applicant"].id


def test_get_application_detail_not_found(db_session, world):
    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session).get_application_detail(4242, principal(world["admin"]))

    assert exc.value.status_code == 404
    assert "4242" in exc.value.detail


def test_get_application_detail_other_company(db_session, world):
    application = make_application(db_session, world["recruitment"], world["applicant"])

    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session).get_application_detail(application.id, principal(world["outsider"]))

    assert exc.value.status_code == 403
    assert exc.value.detail == "Application does not belong to user's company"


def test_get_application_detail_without_company(db_session, world):
    application = make_application(db_session, world["recruitment"], world["applicant"])

    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session).get_application_detail(application.id, principal(world["applicant"]))

    assert exc.value.status_code == 403


# --- status ---

def test_approve_application_emits_event(db_session, world, amqp_service):
    application = make_application(db_session, world["recruitment"], world["applicant"])
    service = ApplicationService(db_session, amqp_service=amqp_service)

    updated = service.update_application_status(application.id, principal(world["admin"]), True)

    assert updated.status == ApplicationStatus.APPROVED
    amqp_service.emit_message.assert_called_once()
    queue, pattern, payload = amqp_service.emit_message.call_args.args
    assert queue == QueueName.NOTIFICATION_SERVICE_QUEUE
    assert pattern == "APPROVED"
    assert payload["id"] == application.id
    assert payload["user"]["email"] == world["applicant"].email
    assert payload["recruitment"]["company"]["id"] == world["company"].id


def test_reject_application_by_hr(db_session, world, amqp_service):
    application = make_application(db_session, world["recruitment"], world["applicant"])
    service = ApplicationService(db_session, amqp_service=amqp_service)

    updated = service.update_application_status(application.id, principal(world["hr"]), False)

    assert updated.status == ApplicationStatus.REJECTED
    assert amqp_service.emit_message.call_args.args[1] == "REJECTED"


def test_update_status_is_idempotent(db_session, world, amqp_service):
    application = make_application(db_session, world["recruitment"], world["applicant"])
    service = ApplicationService(db_session, amqp_service=amqp_service)

    service.update_application_status(application.id, principal(world["admin"]), True)
    again = service.update_application_status(application.id, principal(world["admin"]), True)

    assert again.status == ApplicationStatus.APPROVED
    assert amqp_service.emit_message.call_count == 2


def test_update_status_user_role_forbidden(db_session, world, amqp_service):
    # give the applicant a company so only the role check can fail
    world["applicant"].company_id = world["company"].id
    db_session.commit()
    application = make_application(db_session, world["recruitment"], make_user(db_session))

    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session, amqp_service=amqp_service).update_application_status(
            application.id, principal(world["applicant"]), True
        )

    assert exc.value.status_code == 403
    amqp_service.emit_message.assert_not_called()


def test_update_status_role_checked_before_lookup(db_session, world):
    world["applicant"].company_id = world["company"].id
    db_session.commit()

    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session).update_application_status(9999, principal(world["applicant"]), True)

    assert exc.value.status_code == 403


def test_update_status_without_company(db_session, world):
    application = make_application(db_session, world["recruitment"], world["applicant"])

    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session).update_application_status(application.id, principal(world["applicant"]), True)

    assert exc.value.status_code == 403
    assert exc.value.detail == "Application does not belong to user's company"


def test_update_status_other_company(db_session, world, amqp_service):
    application = make_application(db_session, world["recruitment"], world["applicant"])

    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session, amqp_service=amqp_service).update_application_status(
            application.id, principal(world["outsider"]), False
        )

    assert exc.value.status_code == 403
    db_session.refresh(application)
    assert application.status == ApplicationStatus.PENDING


def test_update_status_not_found(db_session, world):
    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session).update_application_status(777, principal(world["admin"]), True)

    assert exc.value.status_code == 404
    assert "777" in exc.value.detail


# --- content edit and listing ---

def test_update_application_overwrites_content(db_session, world):
    application = make_application(db_session, world["recruitment"], world["applicant"])
    new_cv = make_file(db_session, world["applicant"], name="cv-v2.pdf")

    updated = ApplicationService(db_session).update_application(
        application.id,
        ApplicationUpdate(message="Updated", cv_id=new_cv.id, status=ApplicationStatus.REJECTED),
    )

    assert updated.message == "Updated"
    assert updated.cv_id == new_cv.id
    assert updated.status == ApplicationStatus.REJECTED


def test_update_application_not_found(db_session, world):
    with pytest.raises(HTTPException) as exc:
        ApplicationService(db_session).update_application(31, ApplicationUpdate(message="x", cv_id="y"))

    assert exc.value.status_code == 404


def test_find_all_pagination(db_session, world):
    for _ in range(5):
        make_application(db_session, world["recruitment"], make_user(db_session))

    page = ApplicationService(db_session).find_all(ApplicationFilter(offset=1, limit=2))

    assert page.total == 5
    assert len(page.items) == 2
    assert page.offset == 1
    assert page.limit == 2


def test_find_all_filters_and_sorts(db_session, world):
    first = make_application(db_session, world["recruitment"], make_user(db_session))
    second = make_application(db_session, world["recruitment"], make_user(db_session), status=ApplicationStatus.APPROVED)
    third = make_application(db_session, world["recruitment"], make_user(db_session), status=ApplicationStatus.APPROVED)

    page = ApplicationService(db_session).find_all(
        ApplicationFilter(status=ApplicationStatus.APPROVED, sort="id:desc")
    )

    assert page.total == 2
    assert [a.id for a in page.items] == [third.id, second.id]
    assert first.id not in [a.id for a in page.items]
