from decimal import Decimal

def make_group(client, names=("Asha", "Ben")):
    resp = client.post("/groups", json={
        "name": "Flat",
        "description": "Shared flat",
        "members": [{"name": n, "email": f"{n.lower()}@example.com"} for n in names],
    })
    assert resp.status_code == 200
    body = resp.json()
    return body["id"], [m["id"] for m in body["members"]]

def balances(client, group_id):
    resp = client.get(f"/groups/{group_id}/balances")
    assert resp.status_code == 200
    return {m["id"]: (Decimal(m["balance"]), m["status"]) for m in resp.json()}

def test_health(client):
    assert client.get("/").json() == {"status": "ok"}

def test_equal_expense_then_settlement(client):
    gid, (a, b) = make_group(client)
    resp = client.post(f"/groups/{gid}/expenses/equal",
                       json={"payer_id": a, "amount": "50.00", "category": "Groceries",
                             "description": "Weekly shop", "date": "2024-05-01"})
    assert resp.status_code == 200
    splits = {s["member_id"]: (Decimal(s["amount"]), s["paid"]) for s in resp.json()["splits"]}
    assert splits == {a: (Decimal("25"), True), b: (Decimal("25"), False)}
    assert balances(client, gid) == {a: (Decimal("25"), "is owed $25.00"), b: (Decimal("-25"), "owes $25.00")}

    resp = client.post(f"/groups/{gid}/settlements",
                       json={"from_member_id": b, "to_member_id": a, "amount": "25", "date": "2024-05-02"})
    assert resp.status_code == 200
    assert balances(client, gid) == {a: (Decimal("0"), "settled up"), b: (Decimal("0"), "settled up")}

def test_custom_mismatch_persists_nothing(client):
    gid, (a, b, c) = make_group(client, ("Asha", "Ben", "Chen"))
    resp = client.post(f"/groups/{gid}/expenses/custom",
                       json={"payer_id": a, "amount": "100", "date": "2024-05-01",
                             "amounts": {str(a): "40", str(b): "40"}})
    assert resp.status_code == 400
    assert "must equal total" in resp.json()["detail"]
    assert client.get(f"/groups/{gid}/expenses").json() == []

def test_expense_payer_outside_group(client):
    gid, _ = make_group(client)
    resp = client.post(f"/groups/{gid}/expenses/equal",
                       json={"payer_id": 999, "amount": "10", "date": "2024-05-01"})
    assert resp.status_code == 400

def test_settlement_validation(client):
    gid, (a, b) = make_group(client)
    resp = client.post(f"/groups/{gid}/settlements",
                       json={"from_member_id": a, "to_member_id": a, "amount": "5", "date": "2024-05-01"})
    assert resp.status_code == 400
    resp = client.post(f"/groups/{gid}/settlements",
                       json={"from_member_id": a, "to_member_id": 999, "amount": "5", "date": "2024-05-01"})
    assert resp.status_code == 400
    resp = client.post(f"/groups/{gid}/settlements",
                       json={"from_member_id": a, "to_member_id": b, "amount": "-5", "date": "2024-05-01"})
    assert resp.status_code == 422

def test_ledger_activity_and_suggestions(client):
    gid, (a, b, c) = make_group(client, ("Asha", "Ben", "Chen"))
    client.post(f"/groups/{gid}/expenses/equal",
                json={"payer_id": a, "amount": "90", "description": "Dinner", "date": "2024-05-01"})
    client.post(f"/groups/{gid}/expenses/custom",
                json={"payer_id": b, "amount": "30", "description": "Taxi", "date": "2024-05-03",
                      "amounts": {str(a): "10", str(b): "10", str(c): "10"}})
    client.post(f"/groups/{gid}/settlements",
                json={"from_member_id": c, "to_member_id": a, "amount": "20", "date": "2024-05-03",
                      "memo": "Cash"})

    ledger = client.get(f"/groups/{gid}/ledger").json()
    assert Decimal(ledger["totals"]["total_spent"]) == Decimal("120")
    assert ledger["totals"]["expense_count"] == 2
    got = {m["id"]: Decimal(m["balance"]) for m in ledger["members"]}
    assert got == {a: Decimal("30"), b: Decimal("-10"), c: Decimal("-20")}
    assert sum(got.values()) == 0

    activity = client.get(f"/groups/{gid}/activity", params={"limit": 2}).json()
    assert [(i["kind"], i["description"]) for i in activity] == [("expense", "Taxi"), ("settlement", "Cash")]

    suggestions = client.get(f"/groups/{gid}/ledger/suggestions").json()
    assert {(s["from_member_id"], s["to_member_id"], Decimal(s["amount"])) for s in suggestions} == {
        (c, a, Decimal("20")), (b, a, Decimal("10")),
    }

def test_delete_expense_recomputes_balances(client):
    gid, (a, b) = make_group(client)
    exp = client.post(f"/groups/{gid}/expenses/equal",
                      json={"payer_id": a, "amount": "50", "date": "2024-05-01"}).json()
    assert client.delete(f"/groups/{gid}/expenses/{exp['id']}").status_code == 200
    assert balances(client, gid) == {a: (Decimal("0"), "settled up"), b: (Decimal("0"), "settled up")}
    assert client.delete(f"/groups/{gid}/expenses/{exp['id']}").status_code == 404

def test_missing_group(client):
    assert client.get("/groups/404/ledger").status_code == 404
    assert client.get("/groups/404").status_code == 404

def test_budgets_and_reports(client):
    client.post("/transactions", json={"amount": "2500", "type": "income", "category": "Salary", "date": "2024-06-01"})
    client.post("/transactions", json={"amount": "80", "type": "expense", "category": "Travel", "date": "2024-06-05"})
    resp = client.post("/budgets", json={"category": "Travel", "month": "2024-06", "limit": "200"})
    assert resp.status_code == 200
    dup = client.post("/budgets", json={"category": "Travel", "month": "2024-06", "limit": "300"})
    assert dup.status_code == 409

    status = client.get("/budgets/status", params={"month": "2024-06"}).json()
    assert Decimal(status[0]["spent"]) == Decimal("80")
    assert Decimal(status[0]["remaining"]) == Decimal("120")

    summary = client.get("/reports/monthly", params={"month": "2024-06"}).json()
    assert Decimal(summary["savings"]) == Decimal("2420")
    assert len(client.get("/transactions", params={"month": "2024-06"}).json()) == 2
    assert client.get("/transactions", params={"month": "2024-07"}).json() == []

def test_snapshot_export_and_replace(client):
    gid, (a, b) = make_group(client)
    client.post(f"/groups/{gid}/expenses/equal", json={"payer_id": a, "amount": "50", "date": "2024-05-01"})
    client.post("/budgets", json={"category": "Travel", "month": "2024-06", "limit": "200"})
    snap = client.get("/snapshot").json()
    assert len(snap["groups"]) == 1 and len(snap["expenses"]) == 1

    client.post(f"/groups/{gid}/settlements",
                json={"from_member_id": b, "to_member_id": a, "amount": "25", "date": "2024-05-02"})
    make_group(client, ("Zed",))
    assert client.put("/snapshot", json=snap).status_code == 200

    assert [g["id"] for g in client.get("/groups").json()] == [gid]
    assert client.get(f"/groups/{gid}/settlements").json() == []
    assert balances(client, gid)[a] == (Decimal("25"), "is owed $25.00")
    assert len(client.get("/budgets").json()) == 1

def test_update_group(client):
    gid, members = make_group(client)
    resp = client.put(f"/groups/{gid}", json={"name": "Renamed"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Renamed"
    assert body["description"] == "Shared flat"
    assert [m["id"] for m in body["members"]] == members

    resp = client.put(f"/groups/{gid}", json={"description": "New flat"})
    assert resp.json()["name"] == "Renamed" and resp.json()["description"] == "New flat"
    assert client.get(f"/groups/{gid}").json()["description"] == "New flat"
    assert client.put("/groups/404", json={"name": "Nobody"}).status_code == 404
    assert client.put(f"/groups/{gid}", json={"name": ""}).status_code == 422

def test_budget_status_warning_level(client):
    client.post("/transactions", json={"amount": "90", "type": "expense", "category": "Dining", "date": "2024-08-03"})
    client.post("/budgets", json={"category": "Dining", "month": "2024-08", "limit": "100"})
    row = client.get("/budgets/status", params={"month": "2024-08"}).json()[0]
    assert row["status"] == "warning"
    assert row["percentage"] == 90.0

def test_insights_report(client):
    client.post("/transactions", json={"amount": "50", "type": "expense", "category": "Dining", "date": "2024-07-10"})
    client.post("/transactions", json={"amount": "1000", "type": "income", "category": "Salary", "date": "2024-08-01"})
    client.post("/transactions", json={"amount": "75", "type": "expense", "category": "Dining", "date": "2024-08-03"})
    client.post("/transactions", json={"amount": "25", "type": "expense", "category": "Travel", "date": "2024-08-09"})
    client.post("/budgets", json={"category": "Dining", "month": "2024-08", "limit": "70"})
    client.post("/budgets", json={"category": "Travel", "month": "2024-08", "limit": "30"})

    body = client.get("/reports/insights", params={"month": "2024-08"}).json()
    assert body["previous_month"] == "2024-07"
    assert body["expense_change"] == 100.0
    assert body["savings_rate"] == 90.0
    assert body["over_budget"] == 1
    assert body["warning_budget"] == 1
    assert [c["category"] for c in body["top_categories"]] == ["Dining", "Travel"]

    first = client.get("/reports/insights", params={"month": "2024-07"}).json()
    assert first["expense_change"] == 0
    assert client.get("/reports/insights", params={"month": "2024-13"}).status_code == 422
