from prometheus_client import Counter, Gauge, Histogram

PENDING_CREATED = Counter(
    "contactbot_pending_created_total",
    "Contact requests that started a pending follow-up",
)

PENDING_COALESCED = Counter(
    "contactbot_pending_coalesced_total",
    "Contact requests issued while a follow-up was already pending",
)

PENDING_CANCELLED = Counter(
    "contactbot_pending_cancelled_total",
    "Pending follow-ups cancelled because the contact was shared",
)

PENDING_EXPIRED = Counter(
    "contactbot_pending_expired_total",
    "Pending follow-ups drained by the sweep after their TTL",
)

PENDING_ACTIONS = Gauge(
    "contactbot_pending_actions",
    "Follow-ups currently pending",
)

REMINDERS_SENT = Counter(
    "contactbot_reminders_sent_total",
    "Reminder notifications delivered",
)

REMINDER_SEND_FAILURES = Counter(
    "contactbot_reminder_send_failures_total",
    "Reminder notifications that could not be delivered",
    ["reason"],
)

SWEEP_ERRORS = Counter(
    "contactbot_sweep_errors_total",
    "Sweep ticks that raised before completing",
)

SWEEP_LATENCY = Histogram(
    "contactbot_sweep_seconds",
    "Wall time of one sweep tick",
    buckets=(0.005, 0.05, 0.25, 1.0, 5.0, 30.0),
)

UPDATES_HANDLED = Counter(
    "contactbot_updates_total",
    "Telegram updates handled",
    ["kind"],
)
