"""Initial database schema - users, profiles, categories, products, subscriptions, sales, sales details

Revision ID: 001_initial
Revises: None
Create Date: 2026-01-02
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- Users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_email", "users", ["email"])

    # --- Profiles ---
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("name", sa.String(255)),
        sa.Column("phone", sa.String(50)),
        sa.Column("address", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # --- Categories ---
    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("color", sa.String(20), server_default="#3b82f6"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_categories_user_id", "categories", ["user_id"])

    # --- Products ---
    op.create_table(
        "products",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("category_id", sa.Uuid, sa.ForeignKey("categories.id", ondelete="SET NULL")),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("bar_code", sa.String(100)),
        sa.Column("usd_price", sa.Numeric(10, 2), nullable=False, server_default="0.00"),
        sa.Column("stock", sa.Integer, server_default="0"),
        sa.Column("min_stock", sa.Integer, server_default="5"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", "bar_code", name="uq_products_user_bar_code"),
        sa.CheckConstraint("usd_price >= 0", name="ck_products_usd_price_non_negative"),
    )
    op.create_index("ix_products_user_id", "products", ["user_id"])
    op.create_index("ix_products_name", "products", ["name"])

    # --- Subscriptions ---
    op.create_table(
        "subscriptions",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(20), server_default="test"),
        sa.Column("expiration_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("plan", sa.String(50), server_default="basic"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", name="uq_subscriptions_user_id"),
        sa.CheckConstraint("status IN ('active', 'expired', 'test')", name="ck_subscriptions_status"),
    )

    # --- Sales ---
    op.create_table(
        "sales",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("total_usd", sa.Numeric(10, 2), nullable=False),
        sa.Column("rate_bcv", sa.Numeric(10, 2), nullable=False),
        sa.Column("payment_method", sa.String(20), nullable=False),
        sa.Column("on_credit", sa.Boolean, server_default=sa.false()),
        sa.Column("client_name", sa.String(255)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            "payment_method IN ('efectivo', 'pago_movil', 'zelle', 'credito', 'punto_de_venta')",
            name="ck_sales_payment_method",
        ),
        sa.CheckConstraint("total_usd >= 0", name="ck_sales_total_usd_non_negative"),
        sa.CheckConstraint("rate_bcv >= 0", name="ck_sales_rate_bcv_non_negative"),
    )
    op.create_index("ix_sales_user_created", "sales", ["user_id", "created_at"])

    # --- Sales details ---
    op.create_table(
        "sales_details",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("sale_id", sa.Uuid, sa.ForeignKey("sales.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", sa.Uuid, sa.ForeignKey("products.id", ondelete="SET NULL")),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("unit_price_usd", sa.Numeric(10, 2), nullable=False),
        sa.CheckConstraint("unit_price_usd >= 0", name="ck_sales_details_unit_price_non_negative"),
    )
    op.create_index("ix_sales_details_sale_id", "sales_details", ["sale_id"])
    op.create_index("ix_sales_details_product_id", "sales_details", ["product_id"])


def downgrade() -> None:
    op.drop_table("sales_details")
    op.drop_table("sales")
    op.drop_table("subscriptions")
    op.drop_table("products")
    op.drop_table("categories")
    op.drop_table("profiles")
    op.drop_table("users")
