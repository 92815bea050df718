"""
Desk reference data.
Desks are provisioned outside the booking engine; these queries are read-only.
"""

from database import get_db


def get_all_desks() -> list:
    """
    Get all desks in display order.

    Returns:
        list: [{'id', 'room', 'number', 'label', 'room_name'}, ...]
    """
    db = get_db()
    cursor = db.execute('''
        SELECT id, room, number, label, room_name
        FROM desks
        ORDER BY room, sort_order, number
    ''')
    return [dict(row) for row in cursor.fetchall()]


def get_desk_by_id(desk_id: str) -> dict:
    """
    Get a single desk.

    Args:
        desk_id: Desk identifier (e.g. 'room1-desk2')

    Returns:
        dict or None if the desk does not exist
    """
    db = get_db()
    row = db.execute('''
        SELECT id, room, number, label, room_name
        FROM desks
        WHERE id = ?
    ''', (desk_id,)).fetchone()
    return dict(row) if row else None
