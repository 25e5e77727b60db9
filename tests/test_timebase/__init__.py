"""Timebase retrieval tests."""

# Trimmed Timebase payload with a discrete state tag, a unit tag, a text tag
# and a tag without unit mapping. Samples arrive out of order.
SAMPLE_PAYLOAD = {
    "s": "2025-11-01T00:00:00-05:00",
    "e": "2025-11-02T00:00:00-05:00",
    "tl": [
        {
            "t": {
                "n": "131-FT-001.PV",
                "d": "Juice flow",
                "f": "0.00",
                "u": {"0": "m3/h"},
                "fl": {"area": "131"},
                "t": "Float"
            },
            "d": [
                {"t": "2025-11-01T05:00:10Z", "v": 2.5, "q": 192},
                {"t": "2025-11-01T05:00:00Z", "v": 1.5, "q": 192},
                {"t": "2025-11-01T05:00:20Z", "v": None, "q": 0}
            ]
        },
        {
            "t": {
                "n": "FL001.State",
                "u": {"0": "Stopped", "1": "Running", "2": "Cleaning"}
            },
            "d": [
                {"t": "2025-11-01T05:00:05Z", "v": 1, "q": 192},
                {"t": "2025-11-01T05:00:15Z", "v": 2, "q": 64}
            ]
        },
        {
            "t": {"n": "FL001.Product", "u": {}},
            "d": [
                {"t": "2025-11-01T05:00:00Z", "v": "Apple", "q": -32704}
            ]
        },
        {
            "t": {"n": "FL001.BatchId"},
            "d": []
        }
    ]
}
