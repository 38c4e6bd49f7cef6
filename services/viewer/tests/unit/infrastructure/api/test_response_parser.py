from conftest import BASE_TIME, sample_payload
from src.infrastructure.api.parser import ensure_ascending, parse_samples


class TestParseSamples:
    def test_parses_ascending_records(self):
        payload = [sample_payload(0), sample_payload(5)]
        samples = parse_samples(payload)
        assert [s.timestamp for s in samples] == [
            BASE_TIME,
            BASE_TIME.replace(second=5),
        ]

    def test_ignores_extra_server_fields(self):
        record = sample_payload(0)
        record.update({"agent_id": "a1", "network_rx": 10, "network_tx": 20})
        assert len(parse_samples([record])) == 1

    def test_missing_cpu_cores_defaults_to_one(self):
        record = sample_payload(0)
        del record["cpu_cores"]
        assert parse_samples([record])[0].cpu_cores == 1

    def test_naive_timestamp_read_as_utc(self):
        record = sample_payload(0)
        record["timestamp"] = "2024-03-01T12:00:00"
        assert parse_samples([record])[0].timestamp == BASE_TIME

    def test_timestamp_with_offset(self):
        record = sample_payload(0)
        record["timestamp"] = "2024-03-01T13:00:00.250+01:00"
        sample = parse_samples([record])[0]
        assert sample.timestamp.replace(microsecond=0) == BASE_TIME

    def test_none_and_non_list_are_empty(self):
        assert parse_samples(None) == []
        assert parse_samples({"error": "nope"}) == []
        assert parse_samples("garbage") == []

    def test_invalid_records_are_skipped(self):
        bad = sample_payload(5)
        bad["memory_total"] = "lots"
        payload = [sample_payload(0), bad, 42, sample_payload(10)]
        samples = parse_samples(payload)
        assert len(samples) == 2

    def test_non_finite_values_are_skipped(self):
        nan_record = sample_payload(5)
        nan_record["cpu_percent"] = float("nan")
        inf_record = sample_payload(10)
        inf_record["memory_used"] = float("inf")
        payload = [sample_payload(0), nan_record, inf_record, sample_payload(15)]

        samples = parse_samples(payload)

        offsets = [(s.timestamp - BASE_TIME).total_seconds() for s in samples]
        assert offsets == [0, 15]


class TestEnsureAscending:
    def test_newest_first_is_reversed(self):
        payload = [sample_payload(10), sample_payload(5), sample_payload(0)]
        samples = parse_samples(payload)
        offsets = [(s.timestamp - BASE_TIME).total_seconds() for s in samples]
        assert offsets == [0, 5, 10]

    def test_duplicates_keep_last_received(self):
        payload = [
            sample_payload(0, cpu_percent=1.0),
            sample_payload(5, cpu_percent=2.0),
            sample_payload(5, cpu_percent=3.0),
        ]
        samples = parse_samples(payload)
        assert [s.cpu_percent for s in samples] == [1.0, 3.0]

    def test_ordered_input_returned_unchanged(self):
        samples = parse_samples([sample_payload(0), sample_payload(5)])
        assert ensure_ascending(samples) is samples
