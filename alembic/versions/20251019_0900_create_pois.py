"""create pois table

Revision ID: 20251019_0900_create_pois
Revises:
Create Date: 2025-10-19 09:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20251019_0900_create_pois'
down_revision = None
branch_labels = None
depends_on = None

POI_CATEGORIES = ('LANDMARK', 'NATURE', 'PARTNER_LOCATION', 'FUN_FACT', 'TRAFFIC_ALERT')


def upgrade() -> None:
    op.create_table(
        'pois',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('partner_id', sa.String(36), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.Enum(*POI_CATEGORIES, name='poi_category'), nullable=False, index=True),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('geofence_radius_meters', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('geofence_radius_meters > 0', name='ck_pois_geofence_radius_positive'),
        sa.CheckConstraint('latitude BETWEEN -90 AND 90', name='ck_pois_latitude_range'),
        sa.CheckConstraint('longitude BETWEEN -180 AND 180', name='ck_pois_longitude_range'),
    )
    # Spatial index only where PostGIS is installed; without it nearby
    # queries fall back to scanning.
    op.execute(
        """
        DO $$
        BEGIN
          IF EXISTS (SELECT 1 FROM pg_extension WHERE extname = 'postgis') THEN
            CREATE INDEX ix_pois_location_geography
              ON pois USING GIST (geography(ST_MakePoint(longitude, latitude)));
          END IF;
        END $$;
        """
    )


def downgrade() -> None:
    op.execute("DROP INDEX IF EXISTS ix_pois_location_geography")
    op.drop_table('pois')
    sa.Enum(name='poi_category').drop(op.get_bind(), checkfirst=True)
