# ================================
# FILE: app/assets.py
# ================================
from sqlalchemy.orm import Session, selectinload

from app.models import Asset, User


def list_property_assets(db: Session, user: User, property_id: int | None) -> list[Asset]:
    """All of the user's assets in a property, photos loaded. No property -> []."""
    if property_id is None:
        return []
    return (
        db.query(Asset)
        .options(selectinload(Asset.photos))
        .filter(Asset.property_id == property_id, Asset.user_id == user.id)
        .order_by(Asset.id.asc())
        .all()
    )


def asset_snapshot(asset: Asset) -> dict:
    return {
        "id": asset.id,
        "title": asset.title,
        "category": asset.category,
        "room": asset.room,
        "estimated_value": asset.estimated_value,
        "purchase_price": asset.purchase_price,
        "photos": [
            {"id": p.id, "storage_path": p.storage_path, "is_primary": p.is_primary}
            for p in asset.photos
        ],
    }
