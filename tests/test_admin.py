PASSWORD = "password123"


def login(client, username: str, password: str = PASSWORD) -> str:
    r = client.post("/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_admin_lists_users_and_profiles(client):
    admin = auth_header(login(client, "admin1"))

    users = client.get("/admin/users", headers=admin).json()
    assert [u["username"] for u in users] == ["admin1", "faculty1", "faculty2", "student1", "student2"]
    assert all("password" not in u for u in users)

    faculty = client.get("/admin/faculty", headers=admin).json()
    assert [(f["title"], f["user"]["username"]) for f in faculty] == [
        ("Professor", "faculty1"),
        ("Lecturer", "faculty2"),
    ]

    students = client.get("/admin/students", headers=admin).json()
    assert [s["student_id"] for s in students] == ["S10001", "S10002"]


def test_admin_listings_are_admin_only(client):
    for username in ("faculty1", "student1"):
        headers = auth_header(login(client, username))
        for path in ("/admin/users", "/admin/faculty", "/admin/students"):
            r = client.get(path, headers=headers)
            assert r.status_code == 403, path
            assert r.json()["detail"] == "Forbidden: Insufficient privileges"


def test_departments(client):
    admin = auth_header(login(client, "admin1"))

    r = client.post("/departments", headers=admin, json={"name": "Mathematics", "code": "MATH"})
    assert r.status_code == 201, r.text

    dup = client.post("/departments", headers=admin, json={"name": "Maths", "code": "MATH"})
    assert dup.status_code == 409

    listed = client.get("/departments", headers=auth_header(login(client, "student1"))).json()
    assert [d["code"] for d in listed] == ["CS", "MATH"]


def test_only_admin_creates_departments(client):
    r = client.post(
        "/departments",
        headers=auth_header(login(client, "faculty1")),
        json={"name": "Physics", "code": "PHY"},
    )
    assert r.status_code == 403
