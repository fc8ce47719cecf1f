from prometheus_client import Counter


class EventHubMetrics:
    """Lifecycle and stats-integration counters exposed on /metrics"""

    def __init__(self) -> None:
        self.state_transitions = Counter(
            'event_state_transitions_total',
            'Event state action attempts',
            ['actor', 'action', 'result'],  # result: applied/conflict
        )

        self.stats_fallbacks = Counter(
            'stats_fallbacks_total',
            'Stats lookups that degraded to zero views',
            ['operation'],  # operation: fetch_counts/fetch_count
        )

        self.stats_hits_recorded = Counter(
            'stats_hits_recorded_total',
            'Endpoint hits sent to the stats collector',
            ['result'],  # result: sent/failed
        )

    def record_transition(self, *, actor: str, action: str, result: str) -> None:
        self.state_transitions.labels(actor=actor, action=action, result=result).inc()

    def record_stats_fallback(self, *, operation: str) -> None:
        self.stats_fallbacks.labels(operation=operation).inc()

    def record_hit(self, *, result: str) -> None:
        self.stats_hits_recorded.labels(result=result).inc()


metrics = EventHubMetrics()
