"""
Seed Mock Data for the Equipment Lending API
=============================================
Follows the order staff set the system up in:

1. CATALOGS - brands, vendors, models, departments, branches, locations
2. USERS - staff accounts that sign in
3. ASSETS - equipment registered against the catalogs
4. BORROWS - loans: returned history, open loans and a few overdue ones

Run: python seed_mock_data.py
"""
from datetime import date, timedelta

import psycopg2

from config import settings
from core.overdue import OVERDUE_THRESHOLD_DAYS
from core.security import get_password_hash


def get_sync_db_url():
    """Convert async URL to sync URL for psycopg2"""
    url = str(settings.DATABASE_URL)
    if url.startswith("postgresql+asyncpg"):
        return url.replace("postgresql+asyncpg", "postgresql")
    return url


CATALOGS = {
    "brands": ["Philips", "GE Healthcare", "Mindray", "Nihon Kohden"],
    "vendors": ["MedSupply Co.", "Biomed Partners"],
    "models": ["IntelliVue MX450", "Dash 3000", "BeneHeart D3", "Alaris 8100"],
    "departments": ["ICU", "ER", "Surgery", "Pediatrics", "Radiology", "Cardiology"],
    "branches": ["Main", "North", "East"],
    "locations": ["Store Room A", "Store Room B", "Biomed Workshop"],
}

USERS = [
    {"email": "admin@hospital.local", "password": "admin123", "full_name": "Equipment Desk"},
    {"email": "nurse.lee@hospital.local", "password": "nurse123", "full_name": "Lee Wong"},
]

ASSETS = [
    # asset_id, id_code, name, brand, model, department, branch, serial
    ("EQ-001", "IC-1001", "Patient Monitor", "Philips", "IntelliVue MX450", "ICU", "Main", "PM-45001"),
    ("EQ-002", "IC-1002", "Patient Monitor", "GE Healthcare", "Dash 3000", "ER", "Main", "DS-30002"),
    ("EQ-003", "IC-1003", "Defibrillator", "Mindray", "BeneHeart D3", "ER", "North", "BH-00303"),
    ("EQ-004", "IC-1004", "Infusion Pump", "Philips", "Alaris 8100", "Surgery", "Main", "AL-81004"),
    ("EQ-005", "IC-1005", "Infusion Pump", "Philips", "Alaris 8100", "Pediatrics", "East", "AL-81005"),
    ("EQ-006", "IC-1006", "ECG Machine", "Nihon Kohden", "", "Cardiology", "North", "NK-60006"),
]

# asset tag, borrower, dept, branch, lender, started N days ago, returned after N days (None = open)
BORROWS = [
    ("EQ-001", "Dr. Siriporn", "Surgery", "Main", "Equipment Desk", 40, 5),
    ("EQ-002", "Nurse Anan", "ICU", "Main", "Equipment Desk", 30, 3),
    ("EQ-001", "Nurse Anan", "ICU", "Main", "Equipment Desk", 20, None),
    ("EQ-003", "Dr. Kittipong", "Cardiology", "North", "Equipment Desk", 16, None),
    ("EQ-004", "Nurse Mali", "Pediatrics", "East", "Lee Wong", 6, None),
    ("EQ-005", "Dr. Somchai", "ICU", "Main", "Lee Wong", 2, None),
    ("EQ-006", "Nurse Pim", "", "North", "Lee Wong", 1, 0),
]


def seed_database():
    """Clear the lending tables and load the mock data above."""
    db_url = get_sync_db_url()
    print("=" * 60)
    print("EQUIPMENT LENDING - MOCK DATA SEEDER")
    print("=" * 60)

    conn = psycopg2.connect(db_url)
    cur = conn.cursor()
    today = date.today()

    try:
        cur.execute("SELECT EXISTS (SELECT FROM information_schema.tables WHERE table_name = 'borrows')")
        if not cur.fetchone()[0]:
            print("[ERROR] Tables do not exist. Run migrations first:")
            print("  alembic upgrade head")
            return False

        print("\n[CLEAR] Removing existing data...")
        cur.execute("DELETE FROM borrows")
        cur.execute("DELETE FROM assets")
        cur.execute("DELETE FROM users")
        for table in CATALOGS:
            cur.execute(f"DELETE FROM {table}")
        conn.commit()

        # STEP 1: catalogs
        print("\nSTEP 1: CATALOGS")
        for table, names in CATALOGS.items():
            for name in names:
                cur.execute(f"INSERT INTO {table} (name) VALUES (%s)", (name,))
            print(f"  + {table:12} {len(names)} options")
        conn.commit()

        # STEP 2: users
        print("\nSTEP 2: USERS")
        for user in USERS:
            cur.execute(
                """
                INSERT INTO users (email, hashed_password, full_name, is_active)
                VALUES (%s, %s, %s, %s)
                """,
                (user["email"], get_password_hash(user["password"]), user["full_name"], True)
            )
            print(f"  + {user['full_name']} ({user['email']})")
        conn.commit()

        # STEP 3: assets
        print("\nSTEP 3: ASSETS")
        asset_pks = {}
        for tag, id_code, name, brand, model, dept, branch, serial in ASSETS:
            cur.execute(
                """
                INSERT INTO assets (asset_id, id_code, name, brand, model, department, branch, serial)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING id
                """,
                (tag, id_code, name, brand, model or None, dept, branch, serial)
            )
            asset_pks[tag] = cur.fetchone()[0]
            print(f"  + {tag:8} {name:18} {dept}/{branch}")
        conn.commit()

        # STEP 4: borrows
        print("\nSTEP 4: BORROWS")
        overdue = 0
        for tag, borrower, dept, branch, lender, started_ago, returned_after in BORROWS:
            start = today - timedelta(days=started_ago)
            end = start + timedelta(days=returned_after) if returned_after is not None else None
            cur.execute(
                """
                INSERT INTO borrows (asset_id, borrower_name, borrower_dept, borrower_branch,
                                     lender_name, start_date, end_date, returned)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (asset_pks[tag], borrower, dept or None, branch, lender, start, end, end is not None)
            )
            if end is None and started_ago > OVERDUE_THRESHOLD_DAYS:
                overdue += 1
            state = "RETURNED" if end else "OPEN"
            print(f"  + {tag:8} -> {borrower:16} [{state}] since {start.isoformat()}")
        conn.commit()

        print(f"\nSeeded {len(ASSETS)} assets and {len(BORROWS)} loans ({overdue} overdue).")
        print("\nSign in with:")
        for user in USERS:
            print(f"  {user['email']} / {user['password']}")
        return True

    except psycopg2.Error as e:
        conn.rollback()
        print(f"\n[ERROR] {e}")
        return False

    finally:
        cur.close()
        conn.close()


if __name__ == "__main__":
    seed_database()
