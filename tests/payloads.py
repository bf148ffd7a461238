"""
Sample NOAA CO-OPS responses and a fake client for offline tests.

The payloads are real responses for station 8453767 on 2025-01-02.
"""
import json

from app.coops_records import decode_high_low_payload, decode_latest_payload

LATEST_PAYLOAD = json.dumps({
    "predictions": [
        {"t": "2025-01-02 08:48", "v": "4.415"},
        {"t": "2025-01-02 08:54", "v": "4.457"},
        {"t": "2025-01-02 09:00", "v": "4.493"},
        {"t": "2025-01-02 09:06", "v": "4.522"},
        {"t": "2025-01-02 09:12", "v": "4.545"},
        {"t": "2025-01-02 09:18", "v": "4.560"},
    ]
}).encode()

HIGH_LOW_PAYLOAD = json.dumps({
    "predictions": [
        {"t": "2025-01-02 02:28", "v": "-0.342", "type": "L"},
        {"t": "2025-01-02 09:27", "v": "4.569", "type": "H"},
        {"t": "2025-01-02 15:03", "v": "-0.551", "type": "L"},
        {"t": "2025-01-02 21:58", "v": "4.068", "type": "H"},
    ]
}).encode()

# Same window, starting after the early morning low
UPCOMING_HIGH_LOW_PAYLOAD = json.dumps({
    "predictions": [
        {"t": "2025-01-02 09:27", "v": "4.569", "type": "H"},
        {"t": "2025-01-02 15:03", "v": "-0.551", "type": "L"},
        {"t": "2025-01-02 21:58", "v": "4.068", "type": "H"},
        {"t": "2025-01-03 03:15", "v": "-0.412", "type": "L"},
    ]
}).encode()

EMPTY_PAYLOAD = b'{"predictions": []}'


class FakeCoopsClient:
    """Stands in for CoopsClient, serving canned payloads and recording calls."""

    def __init__(self, latest=LATEST_PAYLOAD, high_low=UPCOMING_HIGH_LOW_PAYLOAD, error=None):
        self.latest = latest
        self.high_low = high_low
        self.error = error
        self.calls = []

    def fetch_latest(self, station):
        self.calls.append(("latest", station))
        if self.error is not None:
            raise self.error
        return decode_latest_payload(self.latest)

    def fetch_high_low(self, station, begin):
        self.calls.append(("high_low", station, begin))
        if self.error is not None:
            raise self.error
        return decode_high_low_payload(self.high_low)
