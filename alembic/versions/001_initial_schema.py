"""001 – Initial schema: teams, profiles, leave requests, bank holidays, audit trail.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000+01:00
"""

from alembic import op

# Revision identifiers
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

# Enum columns are stored as their display strings and checked, not native types
ENUM_CHECKS: list[tuple[str, str, str, list[str]]] = [
    ("profiles", "role", "ck_profiles_role",
     ["Employee", "Manager", "Site Manager", "Administrator"]),
    ("leave_requests", "type", "ck_leave_requests_type",
     ["Annual Leave", "Sick Leave", "Working from Home", "Time in Lieu", "Unpaid Leave"]),
    ("leave_requests", "status", "ck_leave_requests_status",
     ["Pending", "Approved", "Rejected"]),
]


def _add_check(table: str, column: str, name: str, values: list[str]) -> None:
    vals = ", ".join(f"'{v}'" for v in values)
    op.execute(f"ALTER TABLE {table} ADD CONSTRAINT {name} CHECK ({column} IN ({vals}))")


# ---------------------------------------------------------------------------
# UPGRADE
# ---------------------------------------------------------------------------


def upgrade() -> None:
    # ── 1. teams ──────────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE teams (
            id          VARCHAR(36) PRIMARY KEY,
            name        VARCHAR(100) NOT NULL,
            manager_id  VARCHAR(36),
            created_at  TIMESTAMPTZ DEFAULT NOW()
        )
    """)

    # ── 2. profiles ───────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE profiles (
            id                        VARCHAR(36) PRIMARY KEY,
            full_name                 VARCHAR(200) NOT NULL,
            role                      VARCHAR(32)  NOT NULL DEFAULT 'Employee',
            team_id                   VARCHAR(36) REFERENCES teams(id),
            site_id                   VARCHAR(36),
            avatar_url                TEXT,
            annual_leave_entitlement  NUMERIC(5,1) NOT NULL DEFAULT 0,
            taken_leave               NUMERIC(5,1) NOT NULL DEFAULT 0,
            created_at                TIMESTAMPTZ DEFAULT NOW()
        )
    """)

    # ── 3. leave_requests ─────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE leave_requests (
            id                            VARCHAR(36) PRIMARY KEY,
            user_id                       VARCHAR(36) NOT NULL REFERENCES profiles(id),
            start_date                    DATE NOT NULL,
            end_date                      DATE NOT NULL,
            type                          VARCHAR(32) NOT NULL,
            status                        VARCHAR(32) NOT NULL DEFAULT 'Pending',
            notes                         TEXT,
            rejection_reason              TEXT,
            is_bank_holiday_work_request  BOOLEAN NOT NULL DEFAULT FALSE,
            created_at                    TIMESTAMPTZ DEFAULT NOW(),
            updated_at                    TIMESTAMPTZ DEFAULT NOW(),
            CHECK (end_date >= start_date)
        )
    """)
    op.execute("CREATE INDEX ix_leave_requests_user_id ON leave_requests (user_id)")
    op.execute("CREATE INDEX ix_leave_requests_status ON leave_requests (status)")

    # ── 4. bank_holidays ──────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE bank_holidays (
            date  DATE PRIMARY KEY,
            name  VARCHAR(100) NOT NULL
        )
    """)

    # ── 5. audit_trail ────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE audit_trail (
            id           VARCHAR(36) PRIMARY KEY,
            actor_id     VARCHAR(36),
            action       VARCHAR(50) NOT NULL,
            entity_type  VARCHAR(50) NOT NULL,
            entity_id    VARCHAR(36) NOT NULL,
            old_values   JSONB,
            new_values   JSONB,
            created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX ix_audit_trail_entity ON audit_trail (entity_type, entity_id)")
    op.execute("CREATE INDEX ix_audit_trail_created_at ON audit_trail (created_at)")

    # ── Enum checks ───────────────────────────────────────────────────────
    for table, column, name, values in ENUM_CHECKS:
        _add_check(table, column, name, values)

    # ── Seed: England & Wales bank holidays ───────────────────────────────
    op.execute("""
        INSERT INTO bank_holidays (date, name) VALUES
            ('2026-12-25', 'Christmas Day'),
            ('2026-12-28', 'Boxing Day (substitute day)'),
            ('2027-01-01', 'New Year''s Day'),
            ('2027-03-26', 'Good Friday'),
            ('2027-03-29', 'Easter Monday'),
            ('2027-05-03', 'Early May bank holiday'),
            ('2027-05-31', 'Spring bank holiday'),
            ('2027-08-30', 'Summer bank holiday'),
            ('2027-12-27', 'Christmas Day (substitute day)'),
            ('2027-12-28', 'Boxing Day (substitute day)')
    """)


# ---------------------------------------------------------------------------
# DOWNGRADE
# ---------------------------------------------------------------------------


def downgrade() -> None:
    # Drop tables in reverse dependency order
    tables = [
        "audit_trail",
        "bank_holidays",
        "leave_requests",
        "profiles",
        "teams",
    ]
    for t in tables:
        op.execute(f"DROP TABLE IF EXISTS {t} CASCADE")
