import sys

import requests

from reviewer.languages import is_match
from reviewer.detector import LanguageDetector
from reviewer.parsing import parse_review, score_label
from reviewer.prompt import SYSTEM_INSTRUCTION

API_URL = "http://localhost:8000"


def test_flow():
    code = """
def average(values):
    total = 0
    for v in values:
        total += v
    return total / len(values)
    """

    print("1. Detecting language...")
    detected = LanguageDetector().detect(code)
    print(f"   Detected: {detected.label} (relevance {detected.relevance})")
    assert is_match("python", detected.label), "Sample should be detected as python"

    print("2. Requesting review...")
    try:
        response = requests.post(
            f"{API_URL}/api/codereview",
            json={"code": code, "systemInstruction": SYSTEM_INSTRUCTION},
        )
    except requests.exceptions.ConnectionError:
        print("Error: Could not connect to API. Is it running?")
        sys.exit(1)

    if response.status_code != 200:
        print(f"   Review failed ({response.status_code}): {response.json().get('error')}")
        sys.exit(1)

    print("3. Parsing review...")
    parsed = parse_review(response.json().get("text") or "")
    print(f"Code Score: {parsed.score}/100 -> {score_label(parsed.score)}")
    print(f"Fixed code found: {parsed.fixed_code is not None}")

    assert 0 <= parsed.score <= 100
    print("\nSUCCESS! Review complete.")


if __name__ == "__main__":
    test_flow()
