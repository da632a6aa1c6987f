import uuid
from pathlib import Path

from sqlalchemy import func, select

from careertrack.models.base import AsyncSessionLocal
from careertrack.models.job_application import JobApplication
from careertrack.models.resume import Resume


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


async def count_owned(model, user_id):
    async with AsyncSessionLocal() as session:
        result = await session.execute(
            select(func.count()).select_from(model).where(model.user_id == uuid.UUID(user_id))
        )
        return result.scalar_one()


def create_app(client, token, resume_id, **fields):
    payload = {"resume": resume_id, "company": "Acme", "position": "Engineer", **fields}
    return client.post("/api/job-applications", json=payload, headers=bearer(token))


def test_create_and_get(client, register, upload):
    token = register()
    resume_id = upload(token).json()["data"]["_id"]

    resp = create_app(client, token, resume_id, jobDescription="Build things", salary="100k", location="Remote")
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["status"] == "Applied"
    assert data["resume"] == resume_id
    assert data["jobDescription"] == "Build things"
    assert "notes" not in data
    assert "applicationDate" in data and "updatedAt" in data

    fetched = client.get(f"/api/job-applications/{data['_id']}", headers=bearer(token))
    assert fetched.status_code == 200
    assert fetched.json()["data"]["company"] == "Acme"


def test_create_requires_fields(client, register):
    token = register()
    resp = client.post("/api/job-applications", json={"company": "Acme"}, headers=bearer(token))
    assert resp.status_code == 400
    paths = {e["path"] for e in resp.json()["errors"]}
    assert {"resume", "position"} <= paths


def test_create_rejects_unknown_status(client, register, upload):
    token = register()
    resume_id = upload(token).json()["data"]["_id"]
    assert create_app(client, token, resume_id, status="Ghosted").status_code == 400


def test_cannot_reference_another_users_resume(client, register, upload):
    owner = register("owner@example.com")
    other = register("other@example.com")
    resume_id = upload(owner).json()["data"]["_id"]

    resp = create_app(client, other, resume_id)
    assert resp.status_code == 404
    assert client.get("/api/job-applications", headers=bearer(other)).json()["data"] == []


def test_update_fields_and_status(client, register, upload):
    token = register()
    resume_id = upload(token).json()["data"]["_id"]
    app_id = create_app(client, token, resume_id).json()["data"]["_id"]

    resp = client.put(
        f"/api/job-applications/{app_id}",
        json={"status": "Interview", "notes": "Phone screen Tuesday"},
        headers=bearer(token),
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "Interview"
    assert data["notes"] == "Phone screen Tuesday"
    assert data["company"] == "Acme"


def test_update_rejects_null_required_field(client, register, upload):
    token = register()
    resume_id = upload(token).json()["data"]["_id"]
    app_id = create_app(client, token, resume_id).json()["data"]["_id"]

    resp = client.put(f"/api/job-applications/{app_id}", json={"company": None}, headers=bearer(token))
    assert resp.status_code == 400


def test_update_cannot_move_to_foreign_resume(client, register, upload):
    owner = register("owner@example.com")
    other = register("other@example.com")
    own_resume = upload(owner).json()["data"]["_id"]
    foreign_resume = upload(other).json()["data"]["_id"]
    app_id = create_app(client, owner, own_resume).json()["data"]["_id"]

    resp = client.put(f"/api/job-applications/{app_id}", json={"resume": foreign_resume}, headers=bearer(owner))
    assert resp.status_code == 404
    assert client.get(f"/api/job-applications/{app_id}", headers=bearer(owner)).json()["data"]["resume"] == own_resume


def test_other_user_cannot_touch_application(client, register, upload):
    owner = register("owner@example.com")
    intruder = register("intruder@example.com")
    resume_id = upload(owner).json()["data"]["_id"]
    app_id = create_app(client, owner, resume_id).json()["data"]["_id"]

    for resp in (
        client.get(f"/api/job-applications/{app_id}", headers=bearer(intruder)),
        client.put(f"/api/job-applications/{app_id}", json={"status": "Offer"}, headers=bearer(intruder)),
        client.delete(f"/api/job-applications/{app_id}", headers=bearer(intruder)),
    ):
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Job application not found."}

    data = client.get(f"/api/job-applications/{app_id}", headers=bearer(owner)).json()["data"]
    assert data["status"] == "Applied"


def test_delete_application(client, register, upload):
    token = register()
    resume_id = upload(token).json()["data"]["_id"]
    app_id = create_app(client, token, resume_id).json()["data"]["_id"]

    assert client.delete(f"/api/job-applications/{app_id}", headers=bearer(token)).status_code == 200
    assert client.get(f"/api/job-applications/{app_id}", headers=bearer(token)).status_code == 404


def test_list_filters_and_sorts(client, register, upload):
    token = register()
    resume_id = upload(token).json()["data"]["_id"]
    create_app(client, token, resume_id, company="Beta", status="Interview")
    create_app(client, token, resume_id, company="Alpha")
    create_app(client, token, resume_id, company="Gamma", status="Interview")

    resp = client.get(
        "/api/job-applications",
        params={"status": "Interview", "sortBy": "company", "order": "asc"},
        headers=bearer(token),
    )
    assert [a["company"] for a in resp.json()["data"]] == ["Beta", "Gamma"]

    resp = client.get("/api/job-applications", params={"sortBy": "company"}, headers=bearer(token))
    assert [a["company"] for a in resp.json()["data"]] == ["Gamma", "Beta", "Alpha"]

    assert client.get("/api/job-applications", params={"sortBy": "salary"}, headers=bearer(token)).status_code == 400


def test_stats_counts_only_present_statuses(client, register, upload):
    token = register()
    other = register("other@example.com")
    resume_id = upload(token).json()["data"]["_id"]
    for status in ("Applied", "Applied", "Interview", "Offer"):
        create_app(client, token, resume_id, status=status)
    create_app(client, other, upload(other).json()["data"]["_id"], status="Rejected")

    resp = client.get("/api/job-applications/stats/overview", headers=bearer(token))
    assert resp.status_code == 200
    stats = resp.json()["data"]
    assert stats["total"] == 4
    counts = {item["_id"]: item["count"] for item in stats["byStatus"]}
    assert counts == {"Applied": 2, "Interview": 1, "Offer": 1}
    assert stats["byStatus"][0] == {"_id": "Applied", "count": 2}


def test_stats_for_user_without_applications(client, register):
    token = register()
    stats = client.get("/api/job-applications/stats/overview", headers=bearer(token)).json()["data"]
    assert stats == {"total": 0, "byStatus": []}


def test_deleting_resume_keeps_applications(client, register, upload):
    token = register()
    resume_id = upload(token).json()["data"]["_id"]
    app_id = create_app(client, token, resume_id).json()["data"]["_id"]

    client.delete(f"/api/resumes/{resume_id}", headers=bearer(token))

    resp = client.get(f"/api/job-applications/{app_id}", headers=bearer(token))
    assert resp.status_code == 200
    assert "resume" not in resp.json()["data"]


def test_account_deletion_cascades(client, register, upload):
    token = register()
    survivor = register("survivor@example.com")
    user_id = client.get("/api/auth/me", headers=bearer(token)).json()["data"]["_id"]
    resume = upload(token).json()["data"]
    create_app(client, token, resume["_id"])
    create_app(client, token, resume["_id"], status="Offer")
    survivor_resume = upload(survivor).json()["data"]["_id"]
    create_app(client, survivor, survivor_resume)

    assert client.portal.call(count_owned, Resume, user_id) == 1
    assert client.portal.call(count_owned, JobApplication, user_id) == 2

    assert client.delete("/api/auth/account", headers=bearer(token)).status_code == 200

    assert client.portal.call(count_owned, Resume, user_id) == 0
    assert client.portal.call(count_owned, JobApplication, user_id) == 0
    assert not Path(resume["filePath"]).exists()

    # Other users are unaffected
    assert len(client.get("/api/job-applications", headers=bearer(survivor)).json()["data"]) == 1
    assert client.get(f"/api/resumes/{survivor_resume}", headers=bearer(survivor)).status_code == 200
