import pytest

from spice_pos.core import db


@pytest.fixture()
def audit_db():
    db.init_db()
    yield db
    db.close_engine()


def latest_rows(limit):
    conn = db.get_conn()
    try:
        cur = conn.cursor()
        cur.execute(
            "SELECT ts, action, table_id, item_id, old_value, new_value, extra"
            " FROM audit_log ORDER BY id DESC LIMIT ?",
            (limit,),
        )
        return [dict(row) for row in cur.fetchall()]
    finally:
        conn.close()


def test_log_action_records_values_as_text(audit_db):
    audit_db.log_action("add_item", table_id=2, item_id=11, old_value=0, new_value=1)
    audit_db.log_action("end_session", table_id=2, old_value="735.00", new_value="0", extra="bill #1")

    rows = latest_rows(2)

    assert [row["action"] for row in rows] == ["end_session", "add_item"]
    assert rows[0]["extra"] == "bill #1"
    assert rows[1]["table_id"] == 2
    assert rows[1]["item_id"] == 11
    assert rows[1]["old_value"] == "0"
    assert rows[1]["new_value"] == "1"
    assert rows[1]["ts"]


def test_missing_values_stay_null(audit_db):
    audit_db.log_action("clear_order", table_id=5)

    row = latest_rows(1)[0]

    assert row["action"] == "clear_order"
    assert row["item_id"] is None
    assert row["old_value"] is None
    assert row["extra"] is None
