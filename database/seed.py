"""
Database seed data.
Initial desk layout for fresh database installations.
"""


def seed_database(db, rooms_count: int = 2, desks_per_room: int = 4):
    """
    Insert the desk layout: rooms_count rooms with desks_per_room desks each.

    Desk ids follow the 'room{room}-desk{number}' convention used by
    existing booking data.
    """
    sort_order = 0
    for room in range(1, rooms_count + 1):
        for number in range(1, desks_per_room + 1):
            sort_order += 1
            db.execute('''
                INSERT INTO desks (id, room, number, label, room_name, sort_order)
                VALUES (?, ?, ?, ?, ?, ?)
            ''', (
                f'room{room}-desk{number}',
                room,
                number,
                f'Room {room} - Desk {number}',
                f'Room {room}',
                sort_order
            ))
