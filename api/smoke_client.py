"""
Simple smoke client for a running SMS Expense Tracker API
"""

import json
import sys

import requests

# API base URL
BASE_URL = "http://localhost:8000"

SAMPLE_MESSAGES = [
    "Your debit card XXX9098 linked to acc. XXX910001 was used for AED15.75 on Feb 16 2026  8:52PM at OOTTUPURA RESTA,AE",
    "Your Cr.Card XXX5186 was used for AED10.00 on 17/02/2026 17:27:35 at NEW GRILL LAND REST,DUBAI-AE",
    "A Cr. transaction of AED 2100.00 on your account no. XXX910001 was successful",
    "AED2067.00 transferred via ADCB Personal Internet Banking / Mobile App from acc. no. XXX910001 on Feb 16 2026 10:53PM",
    "AED200.00 withdrawn from acc. XXX910001 on Feb  5 2026 12:57PM at ATM-EMIRATES BANK INTL    DUB",
]


def check_health(base_url: str) -> bool:
    """Check health endpoint"""
    print("\n1. Checking health...")
    response = requests.get(f"{base_url}/health", timeout=10)
    print(f"Status Code: {response.status_code}")
    print(f"Response: {response.json()}")
    return response.status_code == 200


def check_parse(base_url: str, message: str) -> bool:
    """Parse one message, then confirm the duplicate is rejected"""
    print(f"\n2. Parsing: {message[:60]}...")
    response = requests.post(f"{base_url}/parse", json={"message": message}, timeout=10)
    print(f"Status Code: {response.status_code}")
    print(json.dumps(response.json(), indent=2))

    if response.status_code != 200:
        return False

    duplicate = requests.post(f"{base_url}/parse", json={"message": message}, timeout=10)
    print(f"Duplicate Status Code: {duplicate.status_code} (expected 409)")
    return duplicate.status_code == 409


def check_summary(base_url: str) -> bool:
    """Fetch the session summary"""
    print("\n3. Fetching summary...")
    response = requests.get(f"{base_url}/summary", timeout=10)
    print(f"Status Code: {response.status_code}")

    summary = response.json()
    print(f"💰 Debit:  {summary['total_debit']:.2f}")
    print(f"💰 Credit: {summary['total_credit']:.2f}")
    print(f"💰 Net:    {summary['net_total']:.2f}")
    return response.status_code == 200


def main(base_url: str = BASE_URL) -> int:
    """Run all checks against a running server"""
    print("=" * 60)
    print("SMS Expense Tracker API - Smoke Check")
    print("=" * 60)

    passed = 0
    total = 0

    try:
        requests.delete(f"{base_url}/session", timeout=10)

        total += 1
        if check_health(base_url):
            passed += 1

        for message in SAMPLE_MESSAGES:
            total += 1
            if check_parse(base_url, message):
                passed += 1

        total += 1
        if check_summary(base_url):
            passed += 1

    except requests.RequestException as e:
        print(f"❌ Error: {e}")
        return 1

    print("\n" + "=" * 60)
    print(f"Checks completed: {passed}/{total} passed")
    print("=" * 60)
    return 0 if passed == total else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else BASE_URL))
