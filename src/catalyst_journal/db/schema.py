"""Database schema for the training workbook."""

SCHEMA = """
-- Registered users
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    email TEXT UNIQUE NOT NULL,
    name TEXT NOT NULL,
    password_hash TEXT NOT NULL,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
    last_login TEXT
);

-- Curriculum seed data (read-only at runtime)
CREATE TABLE IF NOT EXISTS training_days (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    order_num INTEGER UNIQUE NOT NULL,
    title TEXT NOT NULL,
    subtitle TEXT,
    description TEXT
);

CREATE TABLE IF NOT EXISTS training_steps (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    day_id INTEGER NOT NULL REFERENCES training_days(id),
    step_number INTEGER NOT NULL,
    title TEXT NOT NULL,
    description TEXT,
    tools TEXT DEFAULT '[]',  -- JSON array of tool names
    importance TEXT,
    limitations TEXT,
    instructions TEXT,
    UNIQUE(day_id, step_number)
);

-- Per-user step status
CREATE TABLE IF NOT EXISTS user_progress (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    day_id INTEGER NOT NULL REFERENCES training_days(id),
    step_id INTEGER NOT NULL REFERENCES training_steps(id),
    status TEXT NOT NULL DEFAULT 'not_started'
        CHECK (status IN ('not_started', 'in_progress', 'completed')),
    started_at TEXT,
    completed_at TEXT,
    last_updated TEXT DEFAULT CURRENT_TIMESTAMP,
    UNIQUE(user_id, step_id)
);

-- Training-mode answers, keyed by (user, day, step, field)
CREATE TABLE IF NOT EXISTS user_responses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    day_id INTEGER NOT NULL REFERENCES training_days(id),
    step_id INTEGER NOT NULL REFERENCES training_steps(id),
    field_name TEXT NOT NULL,
    field_value TEXT NOT NULL,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
    UNIQUE(user_id, day_id, step_id, field_name)
);

-- User-created real-world applications of the curriculum
CREATE TABLE IF NOT EXISTS processes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    title TEXT NOT NULL,
    description TEXT,
    status TEXT NOT NULL DEFAULT 'active'
        CHECK (status IN ('active', 'completed', 'archived')),
    current_day INTEGER DEFAULT 1,
    current_step INTEGER DEFAULT 1,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
    completed_at TEXT
);

CREATE TABLE IF NOT EXISTS process_steps (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    process_id INTEGER NOT NULL REFERENCES processes(id) ON DELETE CASCADE,
    day_id INTEGER NOT NULL REFERENCES training_days(id),
    step_id INTEGER NOT NULL REFERENCES training_steps(id),
    completed INTEGER DEFAULT 0,
    completed_at TEXT,
    UNIQUE(process_id, step_id)
);

-- Process-mode answers, same shape as user_responses
CREATE TABLE IF NOT EXISTS process_responses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    process_id INTEGER NOT NULL REFERENCES processes(id) ON DELETE CASCADE,
    day_id INTEGER NOT NULL REFERENCES training_days(id),
    step_id INTEGER NOT NULL REFERENCES training_steps(id),
    field_name TEXT NOT NULL,
    field_value TEXT NOT NULL,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
    UNIQUE(process_id, day_id, step_id, field_name)
);

-- Indexes for common queries
CREATE INDEX IF NOT EXISTS idx_users_email ON users(email);
CREATE INDEX IF NOT EXISTS idx_steps_day ON training_steps(day_id, step_number);
CREATE INDEX IF NOT EXISTS idx_progress_user ON user_progress(user_id, day_id);
CREATE INDEX IF NOT EXISTS idx_user_responses_lookup ON user_responses(user_id, day_id, step_id);
CREATE INDEX IF NOT EXISTS idx_processes_user ON processes(user_id, updated_at);
CREATE INDEX IF NOT EXISTS idx_process_steps_process ON process_steps(process_id);
CREATE INDEX IF NOT EXISTS idx_process_responses_lookup ON process_responses(process_id, day_id, step_id);
"""
