from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "player",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("photo_url", sa.String(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=False, server_default="1200"),
        sa.Column("wins", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("losses", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("matches_played", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("version_id", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id", name="pk_player"),
        sa.CheckConstraint(
            "matches_played = wins + losses",
            name="ck_player_matches_played_total",
        ),
    )
    op.create_index("ix_player_rating", "player", ["rating"])

    op.create_table(
        "match",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("player1_id", sa.String(), nullable=False),
        sa.Column("player2_id", sa.String(), nullable=False),
        sa.Column("winner_id", sa.String(), nullable=False),
        sa.Column("reported_by_id", sa.String(), nullable=False),
        sa.Column("responded_by_id", sa.String(), nullable=True),
        sa.Column("score", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("player1_rating_change", sa.Integer(), nullable=True),
        sa.Column("player2_rating_change", sa.Integer(), nullable=True),
        sa.Column("played_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version_id", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id", name="pk_match"),
        sa.ForeignKeyConstraint(
            ["player1_id"], ["player.id"], name="fk_match_player1_id_player"
        ),
        sa.ForeignKeyConstraint(
            ["player2_id"], ["player.id"], name="fk_match_player2_id_player"
        ),
        sa.ForeignKeyConstraint(
            ["winner_id"], ["player.id"], name="fk_match_winner_id_player"
        ),
        sa.ForeignKeyConstraint(
            ["reported_by_id"], ["player.id"], name="fk_match_reported_by_id_player"
        ),
        sa.ForeignKeyConstraint(
            ["responded_by_id"], ["player.id"], name="fk_match_responded_by_id_player"
        ),
        sa.CheckConstraint(
            "player1_id <> player2_id", name="ck_match_distinct_players"
        ),
        sa.CheckConstraint(
            "winner_id = player1_id OR winner_id = player2_id",
            name="ck_match_winner_is_participant",
        ),
        sa.CheckConstraint(
            "reported_by_id = player1_id OR reported_by_id = player2_id",
            name="ck_match_reporter_is_participant",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'rejected')",
            name="ck_match_status_valid",
        ),
    )
    op.create_index("ix_match_status", "match", ["status"])
    op.create_index("ix_match_player1_id", "match", ["player1_id"])
    op.create_index("ix_match_player2_id", "match", ["player2_id"])


def downgrade():
    op.drop_index("ix_match_player2_id", table_name="match")
    op.drop_index("ix_match_player1_id", table_name="match")
    op.drop_index("ix_match_status", table_name="match")
    op.drop_table("match")
    op.drop_index("ix_player_rating", table_name="player")
    op.drop_table("player")
