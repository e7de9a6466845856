import io

from fastapi import UploadFile
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from database import engine, get_db
from main import app
from models.vacation import Vacation

from conftest import future, image_file, past, vacation_form


def _staged_files(store):
    return list(store.staging_dir.iterdir())


# ---------- CREATE ----------


def test_create_vacation_stores_row_and_image(client, store, db_session):
    r = client.post("/vacations", data=vacation_form(), files=image_file(content=b"jpeg-bytes"))
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Vacation created successfully"
    vacation = body["vacation"]
    assert vacation["destination"] == "Lisbon"
    assert vacation["price"] == 1200
    assert vacation["status"] == 1
    assert vacation["image"].endswith(".jpg")
    assert vacation["image"] != "beach.jpg"

    assert store.path_of(vacation["image"]).read_bytes() == b"jpeg-bytes"
    assert _staged_files(store) == []
    assert db_session.get(Vacation, vacation["id"]) is not None


def test_uploaded_image_is_served(client, create_vacation):
    vacation = create_vacation()
    r = client.get(f"/images/{vacation['image']}")
    assert r.status_code == 200
    assert r.content == b"\xff\xd8\xff fake jpeg"


def test_staged_image_is_not_served_before_commit(client, store):
    staged = store.stage(UploadFile(file=io.BytesIO(b"unpublished"), filename="draft.jpg"))
    try:
        assert client.get(f"/images/{staged.filename}").status_code == 404
        assert client.get(f"/images/.staging/{staged.filename}").status_code == 404

        staged.commit()
        r = client.get(f"/images/{staged.filename}")
        assert r.status_code == 200
        assert r.content == b"unpublished"
    finally:
        staged.discard()
        store.remove(staged.filename)


def test_uploaded_names_do_not_collide(create_vacation):
    first = create_vacation()
    second = create_vacation()
    assert first["image"] != second["image"]


def test_create_requires_image(client, db_session):
    r = client.post("/vacations", data=vacation_form())
    assert r.status_code == 400
    assert r.json()["message"] == "image is required"
    assert db_session.query(Vacation).count() == 0


def test_create_missing_field(client):
    data = vacation_form()
    del data["description"]
    r = client.post("/vacations", data=data, files=image_file())
    assert r.status_code == 400
    assert r.json()["message"] == "description is required"


def test_create_price_out_of_range(client):
    for price in ("-1", "10000.01", "50000"):
        r = client.post("/vacations", data=vacation_form(price=price), files=image_file())
        assert r.status_code == 400, price
        assert r.json()["message"].startswith("price must be between 0 and 10000")


def test_create_price_bounds_inclusive(client):
    for price in ("0", "10000"):
        r = client.post("/vacations", data=vacation_form(price=price), files=image_file())
        assert r.status_code == 200, price


def test_create_price_not_a_number(client):
    r = client.post("/vacations", data=vacation_form(price="cheap"), files=image_file())
    assert r.status_code == 400
    assert r.json()["message"] == "price must be a number"


def test_create_end_before_start(client, store):
    data = vacation_form(start_date=future(20), end_date=future(10))
    r = client.post("/vacations", data=data, files=image_file())
    assert r.status_code == 400
    assert r.json()["message"] == "end_date cannot be before start_date"
    assert _staged_files(store) == []


def test_create_start_in_past(client):
    data = vacation_form(start_date=past(3), end_date=future(5))
    r = client.post("/vacations", data=data, files=image_file())
    assert r.status_code == 400
    assert r.json()["message"] == "start_date and end_date must be in the future"


def test_create_bad_date_format(client):
    r = client.post("/vacations", data=vacation_form(start_date="next monday"), files=image_file())
    assert r.status_code == 400
    assert r.json()["message"] == "start_date must be an ISO-8601 date"


class _FailingSession(Session):
    def commit(self):
        raise OperationalError("COMMIT", {}, Exception("database is down"))


def _failing_db():
    db = _FailingSession(bind=engine)
    try:
        yield db
    finally:
        db.close()


def test_create_db_failure_discards_staged_image(client, store):
    before = set(store.directory.iterdir())
    app.dependency_overrides[get_db] = _failing_db

    r = client.post("/vacations", data=vacation_form(), files=image_file())

    assert r.status_code == 500
    # Internal detail stays in the server log
    assert r.json() == {"status": 500, "message": "Internal Server Error"}
    assert set(store.directory.iterdir()) == before
    assert _staged_files(store) == []


# ---------- UPDATE ----------


def test_update_fields_without_image(client, create_vacation):
    vacation = create_vacation()
    data = vacation_form(destination="Porto", price="900")
    r = client.put(f"/update-vacations/{vacation['id']}", data=data)
    assert r.status_code == 200
    updated = r.json()["vacation"]
    assert updated["destination"] == "Porto"
    assert updated["price"] == 900
    assert updated["image"] == vacation["image"]


def test_update_replaces_image_and_removes_old_file(client, store, create_vacation):
    vacation = create_vacation()
    old_path = store.path_of(vacation["image"])
    assert old_path.exists()

    r = client.put(
        f"/update-vacations/{vacation['id']}",
        data=vacation_form(),
        files=image_file("new.png", b"png-bytes"),
    )
    assert r.status_code == 200
    new_image = r.json()["vacation"]["image"]
    assert new_image != vacation["image"]
    assert new_image.endswith(".png")
    assert store.path_of(new_image).read_bytes() == b"png-bytes"
    assert not old_path.exists()


def test_update_db_failure_keeps_old_image(client, store, db_session, create_vacation):
    vacation = create_vacation()
    published = set(store.directory.iterdir())
    app.dependency_overrides[get_db] = _failing_db

    r = client.put(
        f"/update-vacations/{vacation['id']}",
        data=vacation_form(destination="Porto"),
        files=image_file("new.png", b"png-bytes"),
    )

    assert r.status_code == 500
    assert r.json() == {"status": 500, "message": "Internal Server Error"}
    assert _staged_files(store) == []
    assert set(store.directory.iterdir()) == published
    assert store.path_of(vacation["image"]).exists()
    row = db_session.get(Vacation, vacation["id"])
    assert row.image == vacation["image"]
    assert row.destination == "Lisbon"


def test_update_allows_past_dates(client, create_vacation):
    vacation = create_vacation()
    data = vacation_form(start_date=past(10), end_date=past(3))
    r = client.put(f"/update-vacations/{vacation['id']}", data=data)
    assert r.status_code == 200
    assert r.json()["vacation"]["start_date"] == past(10)


def test_update_rejects_end_before_start(client, create_vacation):
    vacation = create_vacation()
    data = vacation_form(start_date=past(3), end_date=past(10))
    r = client.put(f"/update-vacations/{vacation['id']}", data=data)
    assert r.status_code == 400


def test_update_rejects_price_out_of_range(client, create_vacation):
    vacation = create_vacation()
    r = client.put(f"/update-vacations/{vacation['id']}", data=vacation_form(price="10001"))
    assert r.status_code == 400


def test_update_unknown_vacation(client):
    r = client.put("/update-vacations/999", data=vacation_form())
    assert r.status_code == 404
    assert r.json() == {"status": 404, "message": "Vacation not found"}


# ---------- LIST ----------


def test_list_orders_by_id_and_attaches_followers(client, create_vacation):
    first = create_vacation(destination="Rome")
    second = create_vacation(destination="Oslo")
    for user_id in (3, 1):
        client.post(
            "/followers",
            params={"user_id": user_id, "vacation_id": first["id"]},
            json={"status": "follow"},
        )

    r = client.get("/vacations-list")
    assert r.status_code == 200
    vacations = r.json()["vacations"]
    assert [v["id"] for v in vacations] == [first["id"], second["id"]]
    assert vacations[0]["followersCount"] == 2
    assert vacations[0]["followersArray"] == [1, 3]
    assert vacations[1]["followersCount"] == 0
    assert vacations[1]["followersArray"] == []


def test_list_empty(client):
    r = client.get("/vacations-list")
    assert r.json() == {"status": 200, "message": "Vacations retrieved successfully", "vacations": []}


# ---------- DELETE ----------


def test_deleted_vacation_absent_from_list(client, create_vacation, store):
    kept = create_vacation()
    deleted = create_vacation()

    r = client.delete(f"/delete-vacations/{deleted['id']}")
    assert r.status_code == 200
    assert r.json() == {"status": 200, "message": "Vacation deleted successfully"}

    ids = [v["id"] for v in client.get("/vacations-list").json()["vacations"]]
    assert ids == [kept["id"]]
    # Soft delete leaves the image in place
    assert store.path_of(deleted["image"]).exists()


def test_list_include_inactive(client, create_vacation):
    vacation = create_vacation()
    client.delete(f"/delete-vacations/{vacation['id']}")
    vacations = client.get("/vacations-list", params={"include_inactive": "true"}).json()["vacations"]
    assert [v["status"] for v in vacations] == [0]


def test_delete_unknown_vacation(client):
    r = client.delete("/delete-vacations/999")
    assert r.status_code == 404


# ---------- BY ID ----------


def test_get_by_id(client, create_vacation):
    vacation = create_vacation()
    r = client.get(f"/vacations-by-id/{vacation['id']}")
    assert r.status_code == 200
    assert r.json()["vacation"] == vacation


def test_get_by_id_returns_soft_deleted_by_default(client, create_vacation):
    vacation = create_vacation()
    client.delete(f"/delete-vacations/{vacation['id']}")
    r = client.get(f"/vacations-by-id/{vacation['id']}")
    assert r.status_code == 200
    assert r.json()["vacation"]["status"] == 0


def test_get_by_id_active_only(client, create_vacation):
    vacation = create_vacation()
    client.delete(f"/delete-vacations/{vacation['id']}")
    r = client.get(f"/vacations-by-id/{vacation['id']}", params={"include_inactive": "false"})
    assert r.status_code == 404


def test_get_by_id_unknown(client):
    assert client.get("/vacations-by-id/999").status_code == 404


def test_get_by_id_non_integer(client):
    r = client.get("/vacations-by-id/abc")
    assert r.status_code == 400
    assert r.json()["status"] == 400
