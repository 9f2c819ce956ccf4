# seed_demo.py
# Demo citizens and walks for a fresh database. Password for all of them: "123456".
from models import Walk
from modules.accounts.credentials import register_user
from records import current_records

DEMO_WALKERS = [
    # username, display name, km, Wh, seconds
    ("maria.silva", "Maria Silva", 45.3, 2265, 180),
    ("joao.santos", "João Santos", 38.7, 1935, 150),
    ("ana.costa", "Ana Costa", 32.1, 1605, 120),
    ("pedro.lima", "Pedro Lima", 28.5, 1425, 110),
    ("carla.mendes", "Carla Mendes", 24.9, 1245, 100),
]

def run():
    records = current_records()
    created = 0
    for username, display_name, distance, energy, duration in DEMO_WALKERS:
        if records.get_user_by_username(username) is not None:
            continue
        user = register_user(records, username, "123456", display_name=display_name)
        records.insert(Walk(user_id=user.id, distance=distance, energy=energy, duration=duration))
        created += 1

    records.commit()
    print(f"Seed OK: {created} demo walkers created.")

if __name__ == "__main__":
    from app import create_app

    with create_app().app_context():
        run()
