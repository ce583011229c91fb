from concurrent.futures import ThreadPoolExecutor

PASSWORD = "password123"


def login(client, username: str, password: str = PASSWORD) -> str:
    r = client.post("/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_enroll_by_class_code_once(client, seed, storage):
    student = auth_header(login(client, "student2"))

    r1 = client.post("/enrollments", headers=student, json={"class_id": "CS-101-F23"})
    assert r1.status_code == 201, r1.text
    assert r1.json()["classroom_id"] == seed.unowned.id
    assert r1.json()["progress"] == 0

    r2 = client.post("/enrollments", headers=student, json={"class_id": "CS-101-F23"})
    assert r2.status_code == 409
    assert r2.json()["detail"] == "Already enrolled in this class"

    enrollments = storage.get_enrollments_by_student_id(seed.other_student_profile.id)
    assert [e.classroom_id for e in enrollments] == [seed.unowned.id]


def test_enroll_in_unknown_class_is_404(client):
    r = client.post(
        "/enrollments",
        headers=auth_header(login(client, "student2")),
        json={"class_id": "NOPE-999"},
    )
    assert r.status_code == 404
    assert r.json()["detail"] == "Classroom not found"


def test_only_students_enroll(client):
    for username in ("admin1", "faculty1"):
        r = client.post(
            "/enrollments",
            headers=auth_header(login(client, username)),
            json={"class_id": "CS-101-F23"},
        )
        assert r.status_code == 403


def test_my_enrollments(client, seed):
    r = client.get("/enrollments/me", headers=auth_header(login(client, "student1")))

    assert r.status_code == 200
    assert [e["classroom_id"] for e in r.json()] == [seed.owned.id]


def test_achievements_accumulate_points(client):
    student = auth_header(login(client, "student1"))

    for title, points in (("Hackathon", 15), ("Dean's list", 25)):
        r = client.post(
            "/student/achievements", headers=student, json={"title": title, "points": points}
        )
        assert r.status_code == 201, r.text

    profile = client.get("/auth/me/profile", headers=student).json()
    assert profile["achievement_points"] == 40

    listed = client.get("/student/achievements", headers=student).json()
    assert [a["points"] for a in listed] == [15, 25]


def test_negative_achievement_points_are_rejected(client, storage, seed):
    r = client.post(
        "/student/achievements",
        headers=auth_header(login(client, "student1")),
        json={"title": "Penalty", "points": -5},
    )

    assert r.status_code == 400
    assert storage.get_student_profile_by_id(seed.student_profile.id).achievement_points == 0


def test_admin_cannot_add_achievements(client):
    r = client.post(
        "/student/achievements",
        headers=auth_header(login(client, "admin1")),
        json={"title": "Award", "points": 10},
    )
    assert r.status_code == 403


def test_follow_flow(client, seed):
    sam = auth_header(login(client, "student1"))
    sue = auth_header(login(client, "student2"))
    target = seed.other_student_profile.id

    r = client.post("/student/follow", headers=sam, json={"following_id": target})
    assert r.status_code == 201, r.text
    assert r.json()["follower_id"] == seed.student_profile.id

    again = client.post("/student/follow", headers=sam, json={"following_id": target})
    assert again.status_code == 409

    following = client.get("/student/following", headers=sam).json()
    assert [(s["id"], s["user"]["username"]) for s in following] == [(target, "student2")]

    followers = client.get("/student/followers", headers=sue).json()
    assert [s["user"]["username"] for s in followers] == ["student1"]

    assert client.delete(f"/student/follow/{target}", headers=sam).status_code == 200
    assert client.get("/student/following", headers=sam).json() == []
    assert client.get("/student/followers", headers=sue).json() == []


def test_follow_rejects_self_and_unknown(client, seed):
    sam = auth_header(login(client, "student1"))

    self_follow = client.post(
        "/student/follow", headers=sam, json={"following_id": seed.student_profile.id}
    )
    assert self_follow.status_code == 400

    unknown = client.post("/student/follow", headers=sam, json={"following_id": 999})
    assert unknown.status_code == 404
    assert unknown.json()["detail"] == "Student not found"


def test_unfollow_without_edge_is_fine(client, seed):
    r = client.delete(
        f"/student/follow/{seed.other_student_profile.id}",
        headers=auth_header(login(client, "student1")),
    )
    assert r.status_code == 200


def test_student_routes_are_for_students(client):
    faculty = auth_header(login(client, "faculty1"))

    assert client.get("/student/achievements", headers=faculty).status_code == 403
    assert client.get("/student/following", headers=faculty).status_code == 403
    assert client.get("/enrollments/me", headers=faculty).status_code == 403


def test_parallel_enrollments_store_one_row(client, seed, storage):
    student = auth_header(login(client, "student2"))

    def enroll(_):
        return client.post(
            "/enrollments", headers=student, json={"class_id": "CS-101-F23"}
        ).status_code

    with ThreadPoolExecutor(max_workers=16) as pool:
        statuses = list(pool.map(enroll, range(16)))

    assert sorted(statuses) == [201] + [409] * 15
    assert len(storage.get_enrollments_by_student_id(seed.other_student_profile.id)) == 1


def test_parallel_follows_store_one_edge(client, seed, storage):
    sam = auth_header(login(client, "student1"))
    target = seed.other_student_profile.id

    def follow(_):
        return client.post(
            "/student/follow", headers=sam, json={"following_id": target}
        ).status_code

    with ThreadPoolExecutor(max_workers=8) as pool:
        statuses = list(pool.map(follow, range(8)))

    assert sorted(statuses) == [201] + [409] * 7
    assert len(storage.get_following(seed.student_profile.id)) == 1


def test_parallel_achievements_credit_every_point(client, seed, storage):
    student = auth_header(login(client, "student1"))

    def award(i):
        return client.post(
            "/student/achievements", headers=student, json={"title": f"Badge {i}", "points": 3}
        ).status_code

    with ThreadPoolExecutor(max_workers=20) as pool:
        statuses = list(pool.map(award, range(20)))

    assert statuses == [201] * 20
    assert storage.get_student_profile_by_id(seed.student_profile.id).achievement_points == 60
