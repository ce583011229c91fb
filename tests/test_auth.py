from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

from unimanage.core.authentication import authenticate, resolve_session, start_session
from unimanage.core.security import create_access_token, pwd_context

PASSWORD = "password123"


def login(client, username: str, password: str = PASSWORD) -> str:
    r = client.post("/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register_payload(**overrides) -> dict:
    payload = {
        "username": "newstudent",
        "password": "secret1",
        "email": "new.student@college.edu",
        "role": "student",
        "first_name": "New",
        "last_name": "Student",
    }
    payload.update(overrides)
    return payload


def test_student_registration_requires_edu_email(client, storage):
    r = client.post("/auth/register", json=register_payload(email="a@b.com"))

    assert r.status_code == 400
    assert r.json()["detail"] == "Student accounts require a valid .edu email address"
    assert storage.get_user_by_username("newstudent") is None


def test_duplicate_username_is_rejected_across_roles(client, storage):
    r1 = client.post(
        "/auth/register",
        json=register_payload(username="alice", password="secret1", role="faculty", email="alice@uni.edu"),
    )
    assert r1.status_code == 201, r1.text

    r2 = client.post(
        "/auth/register",
        json=register_payload(username="alice", password="otherpass", role="admin", email="alice2@uni.edu"),
    )

    assert r2.status_code == 409
    assert r2.json()["detail"] == "Username already exists"
    assert [u.username for u in storage.get_all_users()].count("alice") == 1


def test_duplicate_email_is_rejected(client):
    r = client.post(
        "/auth/register",
        json=register_payload(username="someoneelse", email="STUDENT1@uni.edu"),
    )

    assert r.status_code == 409
    assert r.json()["detail"] == "Email already exists"


def test_register_logs_the_new_user_in(client):
    r = client.post("/auth/register", json=register_payload())
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["user"]["role"] == "student"
    assert "password" not in body["user"]

    me = client.get("/auth/me", headers=auth_header(body["access_token"]))
    assert me.status_code == 200
    assert me.json()["username"] == "newstudent"


def test_register_creates_the_matching_profile(client, storage):
    faculty = client.post(
        "/auth/register",
        json=register_payload(username="newprof", role="faculty", email="newprof@uni.edu"),
    ).json()["user"]
    student = client.post(
        "/auth/register",
        json=register_payload(student_id="S55555", year=3),
    ).json()["user"]
    generated = client.post(
        "/auth/register",
        json=register_payload(username="nocode", email="nocode@uni.edu"),
    ).json()["user"]

    assert storage.get_faculty_profile_by_user_id(faculty["id"]).title == "Professor"

    profile = storage.get_student_profile_by_user_id(student["id"])
    assert (profile.student_id, profile.year) == ("S55555", 3)

    code = storage.get_student_profile_by_user_id(generated["id"]).student_id
    assert code.startswith("S") and len(code) == 6


def test_register_with_unknown_department_is_rejected(client, storage):
    r = client.post("/auth/register", json=register_payload(department_id=999))

    assert r.status_code == 404
    assert storage.get_user_by_username("newstudent") is None


def test_invalid_payload_is_a_400(client):
    r = client.post("/auth/register", json=register_payload(password="123"))

    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid input"


def test_login_failures_are_indistinguishable(client):
    wrong_password = client.post("/auth/login", json={"username": "student1", "password": "nope"})
    unknown_user = client.post("/auth/login", json={"username": "ghost", "password": PASSWORD})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()


def test_login_is_case_insensitive_on_username(client):
    token = login(client, "STUDENT1")
    assert client.get("/auth/me", headers=auth_header(token)).json()["username"] == "student1"


def test_protected_route_without_session_is_401(client):
    assert client.get("/auth/me").status_code == 401
    assert client.get("/classrooms").status_code == 401
    assert client.get("/auth/me", headers=auth_header("not-a-token")).status_code == 401


def test_logout_ends_the_session_and_is_idempotent(client):
    token = login(client, "student1")
    assert client.get("/auth/me", headers=auth_header(token)).status_code == 200

    assert client.post("/auth/logout", headers=auth_header(token)).status_code == 200
    assert client.get("/auth/me", headers=auth_header(token)).status_code == 401

    assert client.post("/auth/logout", headers=auth_header(token)).status_code == 200
    assert client.post("/auth/logout").status_code == 200


def test_logout_only_ends_its_own_session(client):
    first = login(client, "student1")
    second = login(client, "student1")

    client.post("/auth/logout", headers=auth_header(first))

    assert client.get("/auth/me", headers=auth_header(second)).status_code == 200


def test_my_profile_depends_on_role(client):
    admin = client.get("/auth/me/profile", headers=auth_header(login(client, "admin1")))
    assert admin.status_code == 200
    assert admin.json() is None

    student = client.get("/auth/me/profile", headers=auth_header(login(client, "student1")))
    assert student.json()["student_id"] == "S10001"

    faculty = client.get("/auth/me/profile", headers=auth_header(login(client, "faculty1")))
    assert faculty.json()["title"] == "Professor"


def test_gate_functions_without_http(seed, storage):
    assert authenticate(storage, "faculty1", PASSWORD).id == seed.faculty.id
    assert authenticate(storage, "faculty1", "wrong") is None
    assert authenticate(storage, "ghost", PASSWORD) is None

    token = start_session(storage, seed.faculty)
    assert resolve_session(storage, token).id == seed.faculty.id
    assert resolve_session(storage, token + "x") is None


def test_session_bound_to_missing_user_is_unauthenticated(seed, storage):
    record = storage.create_session(4242, datetime.now(timezone.utc) + timedelta(hours=1))
    token = create_access_token(
        {"sub": "4242", "sid": record.token},
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
    )

    assert resolve_session(storage, token) is None


def test_unknown_username_still_costs_a_hash(storage, monkeypatch):
    calls = []
    monkeypatch.setattr(pwd_context, "dummy_verify", lambda *args, **kwargs: calls.append(1))

    assert authenticate(storage, "ghost", PASSWORD) is None
    assert calls == [1]


def test_parallel_registrations_keep_usernames_unique(client, storage):
    def register(i):
        return client.post(
            "/auth/register",
            json=register_payload(username="dup", role="faculty", email=f"dup{i}@uni.edu"),
        ).status_code

    with ThreadPoolExecutor(max_workers=8) as pool:
        statuses = list(pool.map(register, range(8)))

    assert sorted(statuses) == [201] + [409] * 7
    assert [u.username for u in storage.get_all_users()].count("dup") == 1
