"""create_booking_schema

Revision ID: 3f9c2a7d41b8
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d41b8'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "property_settings",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("property_name", sa.String(255), nullable=False),
        sa.Column("sleeps", sa.Integer(), nullable=False),
        sa.Column("bedrooms", sa.Integer(), nullable=False),
        sa.Column("bathrooms", sa.Numeric(3, 1), nullable=False),
        sa.Column("square_feet", sa.Integer(), nullable=True),
        sa.Column("parking_spaces", sa.Integer(), nullable=True),
        sa.Column("pets_allowed", sa.Boolean(), nullable=False),
        sa.Column("base_nightly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("cleaning_fee", sa.Numeric(10, 2), nullable=False),
        sa.Column("tax_rate", sa.Numeric(6, 4), nullable=False),
        sa.Column("min_nights", sa.Integer(), nullable=False),
        sa.Column("damage_deposit", sa.Numeric(10, 2), nullable=False),
        sa.Column("check_in_time", sa.String(20), nullable=False),
        sa.Column("check_out_time", sa.String(20), nullable=False),
        sa.Column("cancellation_policy", sa.Text(), nullable=True),
        sa.Column("house_rules", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "seasonal_rates",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("nightly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("min_nights", sa.Integer(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_seasonal_rates_active", "seasonal_rates", ["active"])
    op.create_index("ix_seasonal_rates_range", "seasonal_rates", ["start_date", "end_date"])

    op.create_table(
        "addons",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("per_night", sa.Boolean(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
    )

    op.create_table(
        "bookings",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("confirmation_code", sa.String(8), nullable=False),
        sa.Column("guest_name", sa.String(255), nullable=False),
        sa.Column("guest_email", sa.String(255), nullable=False),
        sa.Column("guest_phone", sa.String(50), nullable=False),
        sa.Column("check_in", sa.Date(), nullable=False),
        sa.Column("check_out", sa.Date(), nullable=False),
        sa.Column("num_guests", sa.Integer(), nullable=False),
        sa.Column("num_nights", sa.Integer(), nullable=False),
        sa.Column("subtotal", sa.Numeric(10, 2), nullable=False),
        sa.Column("cleaning_fee", sa.Numeric(10, 2), nullable=False),
        sa.Column("addon_total", sa.Numeric(10, 2), nullable=False),
        sa.Column("tax_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("discount_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("special_requests", sa.Text(), nullable=True),
        sa.Column("status", sa.String(50), nullable=False),
        sa.Column("payment_intent_id", sa.String(255), nullable=True),
        sa.Column("agreement_signed", sa.Boolean(), nullable=False),
        sa.Column("agreement_signed_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("confirmation_code", name="uq_bookings_confirmation_code"),
        sa.CheckConstraint("check_out > check_in", name="ck_bookings_dates"),
    )
    op.create_index("ix_bookings_check_in", "bookings", ["check_in"])
    op.create_index("ix_bookings_guest_email", "bookings", ["guest_email"])
    op.create_index("ix_bookings_status", "bookings", ["status"])

    op.create_table(
        "booking_addons",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("booking_id", sa.UUID(), sa.ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False),
        sa.Column("addon_id", sa.UUID(), sa.ForeignKey("addons.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
    )
    op.create_index("ix_booking_addons_booking_id", "booking_addons", ["booking_id"])

    # One row per night; the unique index is the double-booking guard.
    op.create_table(
        "blocked_dates",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("reason", sa.String(50), nullable=False),
        sa.Column("booking_id", sa.UUID(), sa.ForeignKey("bookings.id", ondelete="CASCADE"), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("date", name="uq_blocked_dates_date"),
    )
    op.create_index("ix_blocked_dates_booking_id", "blocked_dates", ["booking_id"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("guest_name", sa.String(255), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("stay_date", sa.Date(), nullable=True),
        sa.Column("approved", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),
    )
    op.create_index("ix_reviews_approved", "reviews", ["approved"])

    op.create_table(
        "gallery_images",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("url", sa.String(1024), nullable=False),
        sa.Column("thumbnail_url", sa.String(1024), nullable=True),
        sa.Column("caption", sa.String(255), nullable=True),
        sa.Column("alt_text", sa.String(255), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("featured", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_gallery_images_category", "gallery_images", ["category"])

    op.create_table(
        "contact_submissions",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("contact_submissions")
    op.drop_index("ix_gallery_images_category", table_name="gallery_images")
    op.drop_table("gallery_images")
    op.drop_index("ix_reviews_approved", table_name="reviews")
    op.drop_table("reviews")
    op.drop_index("ix_blocked_dates_booking_id", table_name="blocked_dates")
    op.drop_table("blocked_dates")
    op.drop_index("ix_booking_addons_booking_id", table_name="booking_addons")
    op.drop_table("booking_addons")
    op.drop_index("ix_bookings_status", table_name="bookings")
    op.drop_index("ix_bookings_guest_email", table_name="bookings")
    op.drop_index("ix_bookings_check_in", table_name="bookings")
    op.drop_table("bookings")
    op.drop_table("addons")
    op.drop_index("ix_seasonal_rates_range", table_name="seasonal_rates")
    op.drop_index("ix_seasonal_rates_active", table_name="seasonal_rates")
    op.drop_table("seasonal_rates")
    op.drop_table("property_settings")
