import math

from testing.load_test import Sample, gen_record, percentile, summarize


def test_gen_record_shape():
    rec = gen_record()
    assert set(rec) == {"zip"}
    assert 25.0 <= rec["zip"]["latitude"] <= 49.0
    assert -124.5 <= rec["zip"]["longitude"] <= -67.0


def test_percentile():
    assert math.isnan(percentile([], 50))
    assert percentile([1.0, 2.0, 3.0], 50) == 2.0
    assert percentile([0.0, 10.0], 90) == 9.0


def test_summarize_counts_conversions():
    samples = [
        Sample(ok=True, status=200, latency_ms=5.0, error=None, p=0.2, conversion="F"),
        Sample(ok=True, status=200, latency_ms=7.0, error=None, p=0.8, conversion="T"),
        Sample(ok=False, status=400, latency_ms=3.0, error="HTTP 400"),
    ]
    s = summarize(samples, 0.0, 2.0)
    assert (s["total"], s["ok"], s["fail"]) == (3, 2, 1)
    assert s["rps"] == 1.5
    assert s["mean_p"] == 0.5
    assert s["conversion_rate"] == 0.5
    assert s["errors"] == {"HTTP 400": 1}
