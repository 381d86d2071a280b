from types import SimpleNamespace

from jobboard.models.user import Role
from jobboard.services.authorization import Actor, Operation, can_access

OWNER = Actor(user_id="employer-1", email="boss@acme.io", role=Role.EMPLOYER)
OTHER_EMPLOYER = Actor(user_id="employer-2", email="rival@acme.io", role=Role.EMPLOYER)
SEEKER = Actor(user_id="seeker-1", email="ada@acme.io", role=Role.JOB_SEEKER)
OTHER_SEEKER = Actor(user_id="seeker-2", email="bob@acme.io", role=Role.JOB_SEEKER)


def _job(owner="employer-1", active=True):
    return SimpleNamespace(user_id=owner, is_active=active)


def _application(applicant="seeker-1"):
    return SimpleNamespace(user_id=applicant, job_id="job-1")


class TestCatalogRules:
    def test_catalog_open_to_anonymous(self):
        assert can_access(None, Operation.READ_CATALOG)

    def test_active_job_readable_by_anyone(self):
        assert can_access(None, Operation.READ_JOB, _job())
        assert can_access(SEEKER, Operation.READ_JOB, _job())

    def test_inactive_job_only_readable_by_owner(self):
        assert not can_access(None, Operation.READ_JOB, _job(active=False))
        assert not can_access(OTHER_EMPLOYER, Operation.READ_JOB, _job(active=False))
        assert can_access(OWNER, Operation.READ_JOB, _job(active=False))


class TestJobRules:
    def test_create_requires_matching_owner_and_employer_role(self):
        assert can_access(OWNER, Operation.CREATE_JOB, _job())
        assert not can_access(OTHER_EMPLOYER, Operation.CREATE_JOB, _job())
        assert not can_access(SEEKER, Operation.CREATE_JOB, _job(owner="seeker-1"))

    def test_update_and_delete_owner_only(self):
        for operation in (Operation.UPDATE_JOB, Operation.DELETE_JOB):
            assert can_access(OWNER, operation, _job())
            assert not can_access(OTHER_EMPLOYER, operation, _job())
            assert not can_access(None, operation, _job())

    def test_ownerless_job_is_nobodys(self):
        assert not can_access(OWNER, Operation.UPDATE_JOB, _job(owner=None))


class TestApplicationRules:
    def test_create_only_for_self_as_job_seeker(self):
        assert can_access(SEEKER, Operation.CREATE_APPLICATION, _application())
        assert not can_access(OTHER_SEEKER, Operation.CREATE_APPLICATION, _application())
        employer_row = _application(applicant="employer-1")
        assert not can_access(OWNER, Operation.CREATE_APPLICATION, employer_row)

    def test_read_by_applicant_or_job_owner(self):
        row = _application()
        assert can_access(SEEKER, Operation.READ_APPLICATION, row, job_owner="employer-1")
        assert can_access(OWNER, Operation.READ_APPLICATION, row, job_owner="employer-1")
        assert not can_access(OTHER_SEEKER, Operation.READ_APPLICATION, row, job_owner="employer-1")
        assert not can_access(OTHER_EMPLOYER, Operation.READ_APPLICATION, row, job_owner="employer-1")

    def test_status_update_job_owner_only(self):
        row = _application()
        assert can_access(OWNER, Operation.UPDATE_APPLICATION_STATUS, row, job_owner="employer-1")
        assert not can_access(SEEKER, Operation.UPDATE_APPLICATION_STATUS, row, job_owner="employer-1")
        assert not can_access(OTHER_EMPLOYER, Operation.UPDATE_APPLICATION_STATUS, row, job_owner="employer-1")

    def test_missing_job_fails_closed(self):
        assert not can_access(OWNER, Operation.UPDATE_APPLICATION_STATUS, _application(), job_owner=None)


class TestRoleRules:
    def test_role_written_only_for_self(self):
        undecided = Actor(user_id="new-user", email="new@acme.io")
        assert can_access(undecided, Operation.SET_ROLE, SimpleNamespace(user_id="new-user"))
        assert not can_access(undecided, Operation.SET_ROLE, SimpleNamespace(user_id="someone-else"))
