"""Prometheus metrics for partner discovery and contact requests."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

PARTNER_SEARCHES = Counter(
	"partnerfinder_searches_total",
	"Partner searches ranked, by ordering mode",
	["mode"],
)

PARTNER_SEARCH_RESULTS = Histogram(
	"partnerfinder_search_results",
	"Candidates surviving the filters per search",
	buckets=(0, 1, 5, 10, 25, 50, 100),
)

PARTNER_STALE_RESULTS = Counter(
	"partnerfinder_stale_results_total",
	"Completed searches discarded because a newer search already applied",
)

CANDIDATE_POOL_FAILURES = Counter(
	"partnerfinder_candidate_pool_failures_total",
	"Candidate pool fetches that failed",
)

TAXONOMY_REFRESHES = Counter(
	"partnerfinder_taxonomy_refresh_total",
	"Style taxonomy rebuilds, by source",
	["source"],
)

CONTACT_REQUESTS_SENT = Counter(
	"partnerfinder_contact_requests_sent_total",
	"Contact requests created",
)

CONTACT_REQUESTS_CANCELLED = Counter(
	"partnerfinder_contact_requests_cancelled_total",
	"Contact requests cancelled by their sender",
)

CONTACT_REQUEST_REJECTS = Counter(
	"partnerfinder_contact_request_rejects_total",
	"Contact request operations refused, by reason",
	["op", "reason"],
)

CONTACT_CACHE_LOOKUPS = Counter(
	"partnerfinder_contact_cache_lookups_total",
	"Active contact request cache lookups",
	["result"],
)


def inc_partner_search(mode: str, result_count: int) -> None:
	PARTNER_SEARCHES.labels(mode=mode).inc()
	PARTNER_SEARCH_RESULTS.observe(result_count)


def inc_stale_result() -> None:
	PARTNER_STALE_RESULTS.inc()


def inc_candidate_pool_failure() -> None:
	CANDIDATE_POOL_FAILURES.inc()


def inc_taxonomy_refresh(source: str) -> None:
	TAXONOMY_REFRESHES.labels(source=source).inc()


def inc_contact_sent() -> None:
	CONTACT_REQUESTS_SENT.inc()


def inc_contact_cancelled() -> None:
	CONTACT_REQUESTS_CANCELLED.inc()


def inc_contact_reject(op: str, reason: str) -> None:
	CONTACT_REQUEST_REJECTS.labels(op=op, reason=reason).inc()


def inc_contact_cache(result: str) -> None:
	CONTACT_CACHE_LOOKUPS.labels(result=result).inc()


REQUEST_COUNTER = Counter(
	"partnerfinder_http_requests_total",
	"HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"partnerfinder_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)
