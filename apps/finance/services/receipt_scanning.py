"""
Receipt scanning via the Gemini ``generateContent`` REST API.

The scanner only reads a payment receipt (PIX or bank transfer) and
returns what it found. Recording the payment is left to the caller, which
passes the extracted amount and date to ``record_payment``.
"""

import base64
import json
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import NamedTuple, Optional

import requests
from django.conf import settings

from .exceptions import ReceiptScanError, ReceiptScannerNotConfiguredError

logger = logging.getLogger(__name__)

RECEIPT_PROMPT = (
    "Analyse this payment receipt (PIX or bank transfer). "
    "Extract the AMOUNT (numbers only), the payment DATE and the payer NAME if available. "
    'Answer strictly in JSON with the format: {"amount": number, "date": "YYYY-MM-DD", "name": "string"}. '
    'If the receipt cannot be read, answer {"error": "Could not read the receipt"}.'
)


class ScannedReceipt(NamedTuple):
    amount: Decimal
    date: date
    payer_name: Optional[str]


class ReceiptScanner:
    """
    Client for extracting ``(amount, date)`` from a receipt image.

    Example:
        ::

            scanner = ReceiptScanner.from_settings()
            scanned = scanner.extract(image_bytes, 'image/jpeg')
            record_payment(account_id=..., amount=scanned.amount, date=scanned.date)
    """

    def __init__(self, api_key, model, api_url, timeout=60):
        self.api_key = api_key
        self.model = model
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout

    @classmethod
    def from_settings(cls):
        if not settings.GEMINI_API_KEY:
            raise ReceiptScannerNotConfiguredError("GEMINI_API_KEY not configured on server")
        return cls(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            api_url=settings.GEMINI_API_URL,
            timeout=settings.GEMINI_TIMEOUT_SECONDS,
        )

    def extract(self, image_bytes: bytes, content_type: str) -> ScannedReceipt:
        """
        Read amount, date and payer name from a receipt image.

        Raises:
            ReceiptScanError: If the request fails or the answer is unusable
        """
        text = self._generate_content(image_bytes, content_type)
        return self.parse_answer(text)

    def _generate_content(self, image_bytes: bytes, content_type: str) -> str:
        url = f"{self.api_url}/{self.model}:generateContent"
        payload = {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": RECEIPT_PROMPT},
                        {
                            "inlineData": {
                                "mimeType": content_type,
                                "data": base64.b64encode(image_bytes).decode("utf-8"),
                            }
                        },
                    ],
                }
            ],
            "generationConfig": {
                "temperature": 0.0,
                "responseMimeType": "application/json",
            },
        }

        try:
            response = requests.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Receipt scan request failed: %s", e)
            raise ReceiptScanError(f"Receipt scan request failed: {e}") from e

        if response.status_code != 200:
            logger.warning("Receipt scan returned HTTP %s: %s", response.status_code, response.text[:500])
            raise ReceiptScanError(f"Receipt scan failed with HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ReceiptScanError("Receipt scan returned a non-JSON response") from e

        candidates = data.get("candidates") or []
        if not candidates:
            raise ReceiptScanError("Receipt scan returned no candidates")

        parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(part.get("text", "") for part in parts if isinstance(part, dict))

    @staticmethod
    def parse_answer(text: str) -> ScannedReceipt:
        """
        Parse the model's JSON answer.

        Raises:
            ReceiptScanError: If the answer reports an error or lacks a
                usable amount or date
        """
        cleaned = text.strip()
        if cleaned.startswith("```"):
            cleaned = cleaned.strip("`")
            if cleaned.startswith("json"):
                cleaned = cleaned[4:]

        try:
            result = json.loads(cleaned)
        except ValueError as e:
            raise ReceiptScanError("Could not parse the receipt scan answer") from e

        if not isinstance(result, dict):
            raise ReceiptScanError("Unexpected receipt scan answer")
        if result.get("error"):
            raise ReceiptScanError(str(result["error"]))

        try:
            amount = Decimal(str(result["amount"])).quantize(Decimal("0.01"))
        except (KeyError, InvalidOperation, TypeError):
            raise ReceiptScanError("Receipt amount could not be read")

        try:
            paid_on = datetime.strptime(str(result["date"]), "%Y-%m-%d").date()
        except (KeyError, ValueError):
            raise ReceiptScanError("Receipt date could not be read")

        return ScannedReceipt(
            amount=amount,
            date=paid_on,
            payer_name=result.get("name") or None,
        )
