from shared.metrics import get_counter, get_gauge, get_histogram

SERVICE = "viewer"

# Fetching
FETCH_REQUESTS_TOTAL = get_counter(
    "metrics_fetch_requests_total", "Metrics API reads issued.", SERVICE
)
FETCH_ERRORS_TOTAL = get_counter(
    "metrics_fetch_errors_total", "Metrics API reads that failed.", SERVICE
)
FETCH_LATENCY_SECONDS = get_histogram(
    "metrics_fetch_latency_seconds", "Latency of metrics API reads.", SERVICE
)

# Response handling
INVALID_SAMPLES_TOTAL = get_counter(
    "invalid_samples_total", "Sample records rejected during parsing.", SERVICE
)
UNORDERED_RESPONSES_TOTAL = get_counter(
    "unordered_responses_total",
    "Responses that were not strictly ascending by timestamp.",
    SERVICE,
)

# Scheduling
STALE_FETCHES_DISCARDED_TOTAL = get_counter(
    "stale_fetches_discarded_total",
    "Fetch results dropped because a newer request was issued.",
    SERVICE,
)
POLL_TICKS_SKIPPED_TOTAL = get_counter(
    "poll_ticks_skipped_total",
    "Poll ticks skipped because a fetch was still in flight.",
    SERVICE,
)

# Views
OPEN_VIEWS = get_gauge("open_views", "Agent views currently polling.", SERVICE)
