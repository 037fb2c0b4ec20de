"""
Tests for the Gemini receipt scanner.

The HTTP call is patched; nothing leaves the test process.
"""

import json
import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock, patch

import requests

from apps.finance.services import (
    ReceiptScanError,
    ReceiptScanner,
    ReceiptScannerNotConfiguredError,
)

POST = 'apps.finance.services.receipt_scanning.requests.post'


def gemini_response(text, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = {
        'candidates': [
            {'content': {'parts': [{'text': text}]}}
        ]
    }
    return response


@pytest.fixture
def scanner():
    return ReceiptScanner(
        api_key='test-key',
        model='gemini-2.0-flash',
        api_url='https://example.test/v1beta/models/',
        timeout=5,
    )


class TestReceiptScanner:
    """Tests for ReceiptScanner.extract."""

    def test_extracts_amount_and_date(self, scanner, receipt_bytes):
        answer = json.dumps({'amount': 150.5, 'date': '2026-01-30', 'name': 'Wilde'})
        with patch(POST, return_value=gemini_response(answer)) as mock_post:
            scanned = scanner.extract(receipt_bytes, 'image/jpeg')

        assert scanned.amount == Decimal('150.50')
        assert scanned.date == date(2026, 1, 30)
        assert scanned.payer_name == 'Wilde'

        args, kwargs = mock_post.call_args
        assert args[0] == 'https://example.test/v1beta/models/gemini-2.0-flash:generateContent'
        assert kwargs['params'] == {'key': 'test-key'}
        assert kwargs['timeout'] == 5
        inline = kwargs['json']['contents'][0]['parts'][1]['inlineData']
        assert inline['mimeType'] == 'image/jpeg'

    def test_http_error(self, scanner, receipt_bytes):
        with patch(POST, return_value=gemini_response('quota exceeded', status_code=429)):
            with pytest.raises(ReceiptScanError):
                scanner.extract(receipt_bytes, 'image/jpeg')

    def test_network_error(self, scanner, receipt_bytes):
        with patch(POST, side_effect=requests.ConnectionError('down')):
            with pytest.raises(ReceiptScanError):
                scanner.extract(receipt_bytes, 'image/jpeg')

    def test_no_candidates(self, scanner, receipt_bytes):
        response = gemini_response('')
        response.json.return_value = {'candidates': []}
        with patch(POST, return_value=response):
            with pytest.raises(ReceiptScanError):
                scanner.extract(receipt_bytes, 'image/jpeg')


class TestParseAnswer:
    """Tests for ReceiptScanner.parse_answer."""

    def test_code_fenced_answer(self):
        scanned = ReceiptScanner.parse_answer(
            '```json\n{"amount": "100", "date": "2026-02-03"}\n```'
        )

        assert scanned.amount == Decimal('100.00')
        assert scanned.date == date(2026, 2, 3)
        assert scanned.payer_name is None

    def test_unreadable_receipt(self):
        with pytest.raises(ReceiptScanError, match='Could not read'):
            ReceiptScanner.parse_answer('{"error": "Could not read the receipt"}')

    @pytest.mark.parametrize('text', [
        'not json',
        '[1, 2]',
        '{"date": "2026-02-03"}',
        '{"amount": "abc", "date": "2026-02-03"}',
        '{"amount": 100}',
        '{"amount": 100, "date": "03/02/2026"}',
    ])
    def test_unusable_answers(self, text):
        with pytest.raises(ReceiptScanError):
            ReceiptScanner.parse_answer(text)


class TestFromSettings:
    """Tests for ReceiptScanner.from_settings."""

    def test_uses_settings(self, settings):
        settings.GEMINI_API_KEY = 'from-settings'
        settings.GEMINI_MODEL = 'gemini-test'

        scanner = ReceiptScanner.from_settings()

        assert scanner.api_key == 'from-settings'
        assert scanner.model == 'gemini-test'

    def test_missing_key(self, settings):
        settings.GEMINI_API_KEY = ''

        with pytest.raises(ReceiptScannerNotConfiguredError):
            ReceiptScanner.from_settings()
