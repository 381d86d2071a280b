class TestCreateApplication:
    def test_new_application_is_pending(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        seeker = make_user("job_seeker")
        job_id = make_job(employer)

        r = apply(seeker, job_id)
        assert r.status_code == 201
        data = r.json()
        assert data["status"] == "pending"
        assert data["job_id"] == job_id
        assert data["user_id"] == seeker["id"]

    def test_supplied_status_is_ignored(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        seeker = make_user("job_seeker")
        job_id = make_job(employer)

        r = apply(seeker, job_id, status="selected")
        assert r.status_code == 201
        assert r.json()["status"] == "pending"

    def test_duplicate_application_conflicts(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        seeker = make_user("job_seeker")
        job_id = make_job(employer)

        assert apply(seeker, job_id).status_code == 201
        r = apply(seeker, job_id, applicant_name="Someone Else")
        assert r.status_code == 409

        r = client.get(f"/api/v1/jobs/{job_id}/applications", headers=employer["headers"])
        assert r.json()["total"] == 1

    def test_same_user_can_apply_to_different_jobs(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        seeker = make_user("job_seeker")
        first = make_job(employer)
        second = make_job(employer, title="Data Engineer")

        assert apply(seeker, first).status_code == 201
        assert apply(seeker, second).status_code == 201

        r = client.get("/api/v1/applications/mine", headers=seeker["headers"])
        assert len(r.json()) == 2

    def test_employer_cannot_apply(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        other_employer = make_user("employer")
        job_id = make_job(employer)

        r = apply(other_employer, job_id)
        assert r.status_code == 403

    def test_user_without_role_cannot_apply(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        undecided = make_user(role=None)
        job_id = make_job(employer)

        assert apply(undecided, job_id).status_code == 403

    def test_missing_resume_rejected(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        seeker = make_user("job_seeker")
        job_id = make_job(employer)

        r = apply(seeker, job_id, resume_url="   ")
        assert r.status_code == 400

    def test_unknown_job(self, client, make_user, apply):
        seeker = make_user("job_seeker")
        assert apply(seeker, "no-such-job").status_code == 404

    def test_inactive_job_not_open_to_applicants(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        seeker = make_user("job_seeker")
        job_id = make_job(employer, is_active=False)

        assert apply(seeker, job_id).status_code == 404

    def test_name_and_email_default_from_profile(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        seeker = make_user("job_seeker", full_name="Grace Hopper")
        job_id = make_job(employer)

        r = apply(seeker, job_id, applicant_name=None)
        data = r.json()
        assert data["applicant_name"] == "Grace Hopper"
        assert data["applicant_email"] == seeker["email"]

    def test_requires_auth(self, client, make_user, make_job):
        employer = make_user("employer")
        job_id = make_job(employer)
        r = client.post(f"/api/v1/jobs/{job_id}/applications", json={"resume_url": "x"})
        assert r.status_code == 422  # missing header


class TestStatusLifecycle:
    def _setup(self, make_user, make_job, apply):
        employer = make_user("employer")
        seeker = make_user("job_seeker")
        job_id = make_job(employer)
        app_id = apply(seeker, job_id).json()["id"]
        return employer, seeker, job_id, app_id

    def _set(self, client, user, app_id, status):
        return client.put(
            f"/api/v1/applications/{app_id}/status", json={"status": status}, headers=user["headers"]
        )

    def test_owner_moves_through_statuses_without_restriction(self, client, make_user, make_job, apply):
        employer, _, _, app_id = self._setup(make_user, make_job, apply)

        r = self._set(client, employer, app_id, "shortlisted")
        assert r.status_code == 200
        assert r.json()["status"] == "shortlisted"

        r = self._set(client, employer, app_id, "rejected")
        assert r.status_code == 200
        assert r.json()["status"] == "rejected"

        r = self._set(client, employer, app_id, "shortlisted")
        assert r.status_code == 200
        assert r.json()["status"] == "shortlisted"

    def test_reapplying_same_status_is_noop(self, client, make_user, make_job, apply):
        employer, _, _, app_id = self._setup(make_user, make_job, apply)

        first = self._set(client, employer, app_id, "reviewed").json()
        second = self._set(client, employer, app_id, "reviewed").json()
        assert first["status"] == second["status"] == "reviewed"

    def test_every_status_reachable(self, client, make_user, make_job, apply):
        employer, _, _, app_id = self._setup(make_user, make_job, apply)
        for status in ["interviewed", "pending", "selected", "reviewed", "rejected", "shortlisted"]:
            r = self._set(client, employer, app_id, status)
            assert r.status_code == 200
            assert r.json()["status"] == status

    def test_non_owner_employer_forbidden(self, client, make_user, make_job, apply):
        employer, seeker, _, app_id = self._setup(make_user, make_job, apply)
        intruder = make_user("employer")

        r = self._set(client, intruder, app_id, "rejected")
        assert r.status_code == 403

        r = client.get(f"/api/v1/applications/{app_id}", headers=seeker["headers"])
        assert r.json()["status"] == "pending"

    def test_applicant_cannot_change_status(self, client, make_user, make_job, apply):
        _, seeker, _, app_id = self._setup(make_user, make_job, apply)

        r = self._set(client, seeker, app_id, "selected")
        assert r.status_code == 403

    def test_unknown_application(self, client, make_user):
        employer = make_user("employer")
        assert self._set(client, employer, "missing", "reviewed").status_code == 404

    def test_unknown_status_rejected(self, client, make_user, make_job, apply):
        employer, _, _, app_id = self._setup(make_user, make_job, apply)
        assert self._set(client, employer, app_id, "hired").status_code == 422


class TestReadingApplications:
    def test_applicant_and_owner_can_read(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        seeker = make_user("job_seeker")
        job_id = make_job(employer)
        app_id = apply(seeker, job_id).json()["id"]

        assert client.get(f"/api/v1/applications/{app_id}", headers=seeker["headers"]).status_code == 200
        assert client.get(f"/api/v1/applications/{app_id}", headers=employer["headers"]).status_code == 200

    def test_other_users_cannot_read(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        seeker = make_user("job_seeker")
        other_seeker = make_user("job_seeker")
        other_employer = make_user("employer")
        job_id = make_job(employer)
        app_id = apply(seeker, job_id).json()["id"]

        assert client.get(f"/api/v1/applications/{app_id}", headers=other_seeker["headers"]).status_code == 403
        assert client.get(f"/api/v1/applications/{app_id}", headers=other_employer["headers"]).status_code == 403

    def test_only_owner_lists_job_applicants(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        seeker = make_user("job_seeker")
        job_id = make_job(employer)
        apply(seeker, job_id)

        assert client.get(f"/api/v1/jobs/{job_id}/applications", headers=seeker["headers"]).status_code == 403

    def test_list_applicants_with_filters(self, client, make_user, make_job, apply):
        employer = make_user("employer")
        job_id = make_job(employer)
        junior = make_user("job_seeker")
        senior = make_user("job_seeker")
        unknown = make_user("job_seeker")
        apply(junior, job_id, experience_years=1)
        senior_app = apply(senior, job_id, experience_years=8).json()["id"]
        apply(unknown, job_id, experience_years=None)
        client.put(
            f"/api/v1/applications/{senior_app}/status",
            json={"status": "shortlisted"},
            headers=employer["headers"],
        )
        h = employer["headers"]

        r = client.get(f"/api/v1/jobs/{job_id}/applications?min_experience=2", headers=h)
        data = r.json()
        assert data["total"] == 3
        assert [a["experience_years"] for a in data["applications"]] == [8]
        assert data["shortlisted"] == 1

        r = client.get(f"/api/v1/jobs/{job_id}/applications?max_experience=1", headers=h)
        assert len(r.json()["applications"]) == 2  # missing experience counts as 0

        r = client.get(f"/api/v1/jobs/{job_id}/applications?status=pending", headers=h)
        assert len(r.json()["applications"]) == 2
