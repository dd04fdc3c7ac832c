"""Database schema for the training journal."""

SCHEMA = """
-- What the user logged for a day (one row per user and day)
CREATE TABLE IF NOT EXISTS daily_entries (
    user_id TEXT NOT NULL,
    date TEXT NOT NULL,
    mood INTEGER NOT NULL DEFAULT 0,
    heart_rate REAL,
    training_volume REAL,
    notes TEXT NOT NULL DEFAULT '',
    period_symptoms TEXT,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (user_id, date)
);

-- Per-day physiological and note-derived metrics
CREATE TABLE IF NOT EXISTS daily_metrics (
    user_id TEXT NOT NULL,
    date TEXT NOT NULL,
    rpe REAL,
    resting_hr REAL,
    sleep_hours REAL,
    note_sentiment REAL,
    fatigue_tag INTEGER,
    stress_tag INTEGER,
    pain_tag INTEGER,
    confidence_tag INTEGER,
    sleep_tag INTEGER,
    nutrition_tag INTEGER,
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (user_id, date)
);

-- Computed readiness risk (drivers stored as a JSON array)
CREATE TABLE IF NOT EXISTS risk_scores (
    user_id TEXT NOT NULL,
    date TEXT NOT NULL,
    overtrain_risk REAL NOT NULL,
    motivation_risk REAL NOT NULL,
    performance_risk REAL NOT NULL,
    drivers_json TEXT NOT NULL DEFAULT '[]',
    model_version TEXT NOT NULL,
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (user_id, date)
);
"""
