"""
Integration test script: hits all endpoints and verifies responses.

Usage:
    # Mock mode:
    OCR_ADAPTER=mock CAMERA_ADAPTER=mock uvicorn gatelog.web.app:app --port 8000
    python gatelog/scripts/integration_test.py
"""

import base64
import sys
import httpx

import cv2
import numpy as np

BASE = "http://localhost:8000"
TIMEOUT = 60.0
passed = 0
failed = 0


def _sample_jpeg_b64() -> str:
    img = np.full((120, 360, 3), 255, dtype=np.uint8)
    cv2.putText(img, "MH12AB1234", (10, 75), cv2.FONT_HERSHEY_SIMPLEX, 1.4, (0, 0, 0), 3)
    ok, buf = cv2.imencode(".jpg", img)
    return base64.b64encode(bytes(buf)).decode("ascii")


def test(name: str, method: str, path: str, body: dict | None = None, checks: dict | None = None):
    global passed, failed
    url = f"{BASE}{path}"
    checks = checks or {}
    try:
        if method == "GET":
            r = httpx.get(url, timeout=TIMEOUT)
        else:
            r = httpx.post(url, json=body or {}, timeout=TIMEOUT)

        if r.status_code != 200:
            print(f"  FAIL  {name} - HTTP {r.status_code}")
            failed += 1
            return

        data = r.json()
        for key, expected in checks.items():
            actual = data.get(key)
            if actual != expected:
                print(f"  FAIL  {name} - {key}: expected {expected!r}, got {actual!r}")
                failed += 1
                return

        print(f"  OK    {name}")
        passed += 1

    except httpx.ConnectError:
        print(f"  FAIL  {name} - connection refused (is the server running?)")
        failed += 1
    except Exception as e:
        print(f"  FAIL  {name} - {type(e).__name__}: {e}")
        failed += 1


def main():
    print(f"\nIntegration tests against {BASE}\n")
    print("--- Health & Status ---")
    test("GET /health", "GET", "/health", None, {"all_ok": True})
    test("GET /status", "GET", "/status")

    print("\n--- File upload ---")
    image = _sample_jpeg_b64()
    test("POST /ocr/file", "POST", "/ocr/file",
         {"filename": "plate.jpg", "content_type": "image/jpeg", "image": image},
         {"ok": True})
    test("POST /ocr/file (not an image)", "POST", "/ocr/file",
         {"filename": "notes.txt", "content_type": "text/plain", "image": "aGVsbG8="},
         {"ok": False, "error_code": "INVALID_INPUT"})

    print("\n--- Camera ---")
    test("POST /camera/capture (closed)", "POST", "/camera/capture", None,
         {"ok": False, "error_code": "CAMERA_NOT_OPEN"})
    test("POST /camera/open", "POST", "/camera/open", None, {"ok": True, "camera_state": "open"})
    test("POST /camera/open (reopen)", "POST", "/camera/open", None, {"ok": True, "camera_state": "open"})
    test("POST /camera/capture", "POST", "/camera/capture", None, {"ok": True})
    test("POST /camera/close", "POST", "/camera/close", None, {"ok": True, "camera_state": "closed"})

    print("\n--- Entries ---")
    test("POST /entries", "POST", "/entries",
         {"vehicle_number": "KA01EF9012", "vehicle_status": "IN", "vehicle_category": "Car"},
         {"vehicle_number": "KA01EF9012", "purpose_of_visit": "Job"})
    test("GET /entries/recent", "GET", "/entries/recent")

    print("\n--- Clear ---")
    test("POST /ocr/clear", "POST", "/ocr/clear", None, {"ok": True})
    test("GET /status (final)", "GET", "/status", None, {"preview": None})

    total = passed + failed
    print(f"\n{'='*40}")
    print(f"  {passed}/{total} passed, {failed} failed")
    print(f"{'='*40}\n")

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
