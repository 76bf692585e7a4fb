"""Seeds a running dev server with sample donors and one hospital request."""
import requests

BASE_URL = "http://127.0.0.1:8000/api"

donors = [
    {"name": "Arun Kumar", "age": 29, "gender": "male", "bloodGroup": "A+", "city": "Chennai", "pincode": "600001", "mobile": "9876500001"},
    {"name": "Priya S", "age": 25, "gender": "female", "bloodGroup": "O+", "city": "Chennai", "pincode": "600020", "mobile": "9876500002"},
    {"name": "Karthik R", "age": 34, "gender": "male", "bloodGroup": "B+", "city": "Erode", "pincode": "638001", "mobile": "9876500003"},
    {"name": "Meena V", "age": 41, "gender": "female", "bloodGroup": "AB-", "city": "Madurai", "pincode": "625001", "mobile": "9876500004"},
    {"name": "Sathya", "age": 22, "gender": "other", "bloodGroup": "O-", "city": "Coimbatore", "pincode": "641001", "mobile": "9876500005"},
]


def seed():
    existing = requests.get(f"{BASE_URL}/donors").json().get("results", [])
    known = {(d["name"], d["mobile"]) for d in existing}
    for d in donors:
        # Check if exists to avoid dupes
        if (d["name"], d["mobile"]) in known:
            print(f"Skipped {d['name']} (Exists)")
            continue
        requests.post(f"{BASE_URL}/donors", json=d).raise_for_status()
        print(f"Added {d['name']} ({d['bloodGroup']}, {d['city']})")

    # hospital login so the request carries a requester name
    otp = requests.post(f"{BASE_URL}/auth/request-otp", json={
        "accountType": "hospital", "email": "ops@cityhospital.in",
    }).json()
    if not otp.get("devCode"):
        print("Server is in production mode; skipping hospital request.")
        return
    session = requests.post(f"{BASE_URL}/auth/verify-otp", json={
        "accountType": "hospital", "email": "ops@cityhospital.in", "otp": otp["devCode"],
    }).json()
    account = session["account"]
    requests.post(f"{BASE_URL}/me", json={"name": "CITY HOSPITAL"},
                  headers={"Authorization": f"Bearer {session['token']}"}).raise_for_status()

    need = requests.post(f"{BASE_URL}/needs", json={
        "bloodGroup": "B+",
        "city": "Erode",
        "pincode": "638001",
        "neededAtISO": "2030-01-01T09:00:00.000Z",
        "timeOption": "within_5_hours",
        "notes": "Ward 4, surgery",
        "requesterAccountId": account["id"],
    }).json()
    print(f"Added need {need['id']} by {need.get('requesterName')}")


if __name__ == "__main__":
    seed()
