"""
Fake OCR.space server for testing OCRSpaceOCR without an API key.

Simulates POST /parse/image on port 9100. The reply text comes from the
FAKE_OCR_TEXT env var; FAKE_OCR_EXIT_CODE forces an error code.

Usage:
    python gatelog/scripts/fake_ocr_server.py  (terminal 1)
    OCR_SPACE_API_KEY=dummy OCR_SPACE_URL=http://localhost:9100/parse/image \\
        uvicorn gatelog.web.app:app  (terminal 2)
"""

import os
import time
import uvicorn
from fastapi import FastAPI, Request

app = FastAPI(title="fake-ocr-server")

REPLY_TEXT = os.getenv("FAKE_OCR_TEXT", "MH 12 AB 1234\n")
EXIT_CODE = int(os.getenv("FAKE_OCR_EXIT_CODE", "1"))


@app.post("/parse/image")
async def parse_image(request: Request):
    form = await request.form()
    upload = form.get("file")
    name = getattr(upload, "filename", None)
    print(f"[ocr] file={name} language={form.get('language')} engine={form.get('OCREngine')} scale={form.get('scale')}")
    time.sleep(0.3)
    if not form.get("apikey"):
        return {"OCRExitCode": 99, "IsErroredOnProcessing": True, "ErrorMessage": ["missing apikey"]}
    if EXIT_CODE != 1:
        return {"OCRExitCode": EXIT_CODE, "IsErroredOnProcessing": True, "ErrorMessage": ["forced error"]}
    return {
        "OCRExitCode": 1,
        "IsErroredOnProcessing": False,
        "ParsedResults": [{"ParsedText": REPLY_TEXT, "FileParseExitCode": 1}],
    }


if __name__ == "__main__":
    print("Fake OCR server starting on http://localhost:9100")
    uvicorn.run(app, host="0.0.0.0", port=9100)
