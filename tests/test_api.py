from feedesk.seed import seed_admin


async def test_health(client):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


async def test_requires_token(client):
    resp = await client.get("/api/students/")
    assert resp.status_code == 401


async def test_login_rejects_bad_password(client):
    await seed_admin()
    resp = await client.post("/api/auth/login", json={"staff_id": "admin", "password": "nope"})
    assert resp.status_code == 401


async def test_me(client, admin_headers):
    resp = await client.get("/api/auth/me", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["role"] == "admin"


async def test_non_admin_cannot_write_settings(client, admin_headers):
    resp = await client.post(
        "/api/settings/staff", json={"staff_id": "clerk", "name": "Clerk", "password": "pw"}, headers=admin_headers
    )
    assert resp.status_code == 201
    login = await client.post("/api/auth/login", json={"staff_id": "clerk", "password": "pw"})
    clerk = {"Authorization": f"Bearer {login.json()['access_token']}"}
    resp = await client.post("/api/settings/branches", json={"name": "Main"}, headers=clerk)
    assert resp.status_code == 403
    resp = await client.get("/api/settings", headers=clerk)
    assert resp.status_code == 200
    assert [s["staff_id"] for s in resp.json()["staff"]] == ["admin", "clerk"]
    assert "password" not in resp.json()["staff"][0]
    assert "hashed_password" not in resp.json()["staff"][0]


async def test_catalog_endpoints(client, admin_headers):
    resp = await client.post("/api/settings/branches", json={"name": "Main"}, headers=admin_headers)
    assert resp.status_code == 201
    branch_id = resp.json()["id"]
    resp = await client.post("/api/settings/branches", json={"name": "Main"}, headers=admin_headers)
    assert resp.status_code == 409
    assert resp.json()["error"] == "DUPLICATE"
    resp = await client.put("/api/settings/org", json={"name": "City College"}, headers=admin_headers)
    assert resp.json()["name"] == "City College"
    data = (await client.get("/api/settings", headers=admin_headers)).json()
    assert data["settings"]["name"] == "City College"
    assert data["branches"] == [{"id": branch_id, "name": "Main"}]
    resp = await client.delete(f"/api/settings/branches/{branch_id}", headers=admin_headers)
    assert resp.status_code == 204
    resp = await client.get("/api/settings/departments", headers=admin_headers)
    assert resp.status_code == 404


async def test_fee_collection_flow(client, admin_headers):
    h = admin_headers
    resp = await client.post(
        "/api/fee-plans/",
        json={
            "name": "BSc CS",
            "frequency": "Semester",
            "heads": [{"name": "Tuition", "amount": 50000}, {"name": "Lab", "amount": 5000}],
        },
        headers=h,
    )
    assert resp.status_code == 201
    plan_id = resp.json()["id"]
    plan = (await client.get(f"/api/fee-plans/{plan_id}", headers=h)).json()
    assert plan["total_amount"] == 55000

    resp = await client.post(
        "/api/students/",
        json={
            "name": "Asha Rao", "guardian_name": "K Rao", "roll_no": "R1", "phone": "9876500001",
            "plan_id": plan_id, "branch_id": "b1", "semester_id": "s1", "session_id": "x1",
        },
        headers=h,
    )
    assert resp.status_code == 201
    student_id = resp.json()["id"]

    resp = await client.post(
        "/api/transactions/",
        json={"student_id": student_id, "amount": 20000, "payment_mode": "Cash", "academic_term": "Sem 1"},
        headers=h,
    )
    assert resp.status_code == 201
    resp = await client.post(
        "/api/transactions/",
        json={"student_id": student_id, "amount": 40000, "payment_mode": "UPI Digital", "external_transaction_id": "TXN1"},
        headers=h,
    )
    assert resp.status_code == 201
    payment_id = resp.json()["id"]

    resp = await client.post(
        "/api/transactions/",
        json={"student_id": student_id, "amount": 10, "payment_mode": "UPI Digital", "external_transaction_id": "TXN1"},
        headers=h,
    )
    assert resp.status_code == 409
    assert resp.json()["error"] == "DUPLICATE_TXID"

    [row] = (await client.get("/api/reports/ledger", headers=h)).json()
    assert (row["total_due"], row["total_paid"], row["balance"]) == (55000, 60000, -5000)

    summary = (await client.get("/api/reports/summary", headers=h)).json()
    assert summary["total_collections"] == 60000
    assert summary["student_count"] == 1
    assert summary["recent_payments"][0]["external_transaction_id"] == "TXN1"

    receipt = (await client.get(f"/api/transactions/{payment_id}/receipt", headers=h)).json()
    assert receipt["amount_in_words"] == "Rupees Forty Thousand Only"

    txs = (await client.get("/api/transactions/", params={"q": "asha"}, headers=h)).json()
    assert len(txs) == 2
    students = (await client.get("/api/students/", params={"q": "r1"}, headers=h)).json()
    assert students[0]["total_paid"] == 60000


async def test_non_cash_requires_transaction_id(client, admin_headers):
    resp = await client.post(
        "/api/transactions/",
        json={"student_id": "s", "amount": 100, "payment_mode": "Cheque"},
        headers=admin_headers,
    )
    assert resp.status_code == 422


async def test_error_mapping(client, admin_headers):
    h = admin_headers
    resp = await client.post("/api/fee-plans/", json={"name": "Empty", "heads": []}, headers=h)
    assert resp.status_code == 400
    assert resp.json()["error"] == "VALIDATION_ERROR"
    resp = await client.put(
        "/api/fee-plans/64b7f0000000000000000000", json={"heads": [{"name": "Tuition", "amount": 1}]}, headers=h
    )
    assert resp.status_code == 404
    assert resp.json()["error"] == "NOT_FOUND"
    resp = await client.post("/api/transactions/", json={"student_id": "s", "amount": 0}, headers=h)
    assert resp.status_code == 400
    resp = await client.post(
        "/api/transactions/", json={"student_id": "s", "amount": "1.000000000000000000000000000000000001"}, headers=h
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "VALIDATION_ERROR"


async def test_plan_delete_leaves_student(client, admin_headers):
    h = admin_headers
    plan_id = (await client.post(
        "/api/fee-plans/", json={"name": "Temp", "heads": [{"name": "Tuition", "amount": 100}]}, headers=h
    )).json()["id"]
    student_id = (await client.post(
        "/api/students/",
        json={"name": "Asha", "roll_no": "R1", "plan_id": plan_id, "branch_id": "b", "semester_id": "s", "session_id": "x"},
        headers=h,
    )).json()["id"]
    assert (await client.delete(f"/api/fee-plans/{plan_id}", headers=h)).status_code == 204
    student = (await client.get(f"/api/students/{student_id}", headers=h)).json()
    assert student["plan_name"] is None
    [row] = (await client.get("/api/reports/ledger", headers=h)).json()
    assert row["total_due"] == 0
