"""
Manual end-to-end check against a running dev server:
OTP login, profile update, donor registration and the live need feed.
"""
import json
import threading
import time

import requests

BASE_URL = "http://127.0.0.1:8000/api"
MOBILE = "9000012345"


def listen_for_need(received: list, ready: threading.Event):
    with requests.get(f"{BASE_URL}/needs/stream", stream=True, timeout=30) as res:
        ready.set()
        for line in res.iter_lines(decode_unicode=True):
            if line and line.startswith("data: "):
                received.append(json.loads(line[len("data: "):]))
                return


def run():
    print("\n--- Requesting OTP ---")
    otp = requests.post(f"{BASE_URL}/auth/request-otp",
                        json={"accountType": "individual", "mobile": MOBILE}).json()
    print(f"Request ID: {otp['requestId']} | Channels: {otp['channels']}")
    if "devCode" not in otp:
        print("❌ No devCode returned (production mode?)")
        return

    print("\n--- Verifying OTP ---")
    res = requests.post(f"{BASE_URL}/auth/verify-otp", json={
        "accountType": "individual", "mobile": MOBILE, "otp": otp["devCode"],
    })
    if res.status_code != 200:
        print(f"❌ Verify failed: {res.text}")
        return
    token = res.json()["token"]
    headers = {"Authorization": f"Bearer {token}"}
    print("✅ Logged in")

    requests.post(f"{BASE_URL}/me", json={"name": "Flow Tester"}, headers=headers)
    me = requests.get(f"{BASE_URL}/me", headers=headers).json()
    print(f"Account: {me['account']['name']} ({me['account']['id']})")

    print("\n--- Live feed ---")
    received, ready = [], threading.Event()
    listener = threading.Thread(target=listen_for_need, args=(received, ready), daemon=True)
    listener.start()
    ready.wait(5)
    time.sleep(0.5)

    need = requests.post(f"{BASE_URL}/needs", json={
        "bloodGroup": "O-", "city": "Salem", "pincode": "636001",
        "neededAtISO": "2030-01-01T09:00:00Z", "requesterAccountId": me["account"]["id"],
    }).json()
    listener.join(10)

    if received and received[0]["id"] == need["id"]:
        print(f"✅ Feed delivered need {need['id']} (requested by {received[0].get('requesterName')})")
    else:
        print("❌ Feed did not deliver the new need")

    stats = requests.get(f"{BASE_URL}/stats").json()
    print(f"Stats: {stats}")


if __name__ == "__main__":
    run()
