import json
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ...core.errors import UserAlreadyExists, UserHasPets
from ...domain.models import (
    Adoption,
    AdoptionStatus,
    Pet,
    PetSpecies,
    Role,
    User,
    UserDocument,
)
from ...domain.ports.persistence import PersistenceGateway


class SQLitePersistence(PersistenceGateway):
    """SQLite-backed implementation of the persistence gateway."""

    def __init__(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._initialize()

    def _initialize(self) -> None:
        with self._lock, self._conn:
            self._conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    first_name TEXT NOT NULL,
                    last_name TEXT NOT NULL,
                    email TEXT NOT NULL UNIQUE,
                    password_hash TEXT NOT NULL,
                    role TEXT NOT NULL DEFAULT 'user',
                    pets TEXT NOT NULL DEFAULT '[]',
                    documents TEXT NOT NULL DEFAULT '[]',
                    last_connection TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS pets (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    species TEXT NOT NULL,
                    breed TEXT,
                    age INTEGER,
                    description TEXT,
                    image TEXT,
                    adopted INTEGER NOT NULL DEFAULT 0,
                    owner_id INTEGER,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    CHECK ((adopted = 1) = (owner_id IS NOT NULL))
                );

                CREATE INDEX IF NOT EXISTS idx_pets_species ON pets(species);

                CREATE TABLE IF NOT EXISTS adoptions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    owner_id INTEGER NOT NULL,
                    pet_id INTEGER NOT NULL,
                    status TEXT NOT NULL DEFAULT 'pending',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_adoptions_owner ON adoptions(owner_id);
                CREATE INDEX IF NOT EXISTS idx_adoptions_pet ON adoptions(pet_id);
                """
            )

    def close(self) -> None:
        self._conn.close()

    # UserRepository API ----------------------------------------------------
    def get_user_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            row = self._fetch_user_locked(user_id)
        return self._row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            cur = self._conn.execute("SELECT * FROM users WHERE email = ?", (email.strip().lower(),))
            row = cur.fetchone()
        return self._row_to_user(row) if row else None

    def list_users(self) -> List[User]:
        with self._lock:
            cur = self._conn.execute("SELECT * FROM users ORDER BY id ASC")
            rows = cur.fetchall()
        return [self._row_to_user(row) for row in rows]

    def create_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
        last_connection: Optional[datetime] = None,
    ) -> User:
        now = self._now()
        connection = self._format_datetime(last_connection) if last_connection else None
        try:
            with self._lock, self._conn:
                cur = self._conn.execute(
                    """
                    INSERT INTO users (
                        first_name, last_name, email, password_hash, role,
                        last_connection, created_at, updated_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        first_name,
                        last_name,
                        email.strip().lower(),
                        password_hash,
                        Role(role).value,
                        connection,
                        now,
                        now,
                    ),
                )
                row = self._fetch_user_locked(cur.lastrowid)
        except sqlite3.IntegrityError as exc:
            raise UserAlreadyExists() from exc
        if not row:
            raise RuntimeError("Failed to persist user.")
        return self._row_to_user(row)

    def update_user(
        self,
        user_id: int,
        *,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        role: Optional[Role] = None,
        last_connection: Optional[datetime] = None,
    ) -> Optional[User]:
        updates = []
        params: List[Any] = []
        if first_name is not None:
            updates.append("first_name = ?")
            params.append(first_name)
        if last_name is not None:
            updates.append("last_name = ?")
            params.append(last_name)
        if email is not None:
            updates.append("email = ?")
            params.append(email.strip().lower())
        if role is not None:
            updates.append("role = ?")
            params.append(Role(role).value)
        if last_connection is not None:
            updates.append("last_connection = ?")
            params.append(self._format_datetime(last_connection))

        try:
            with self._lock, self._conn:
                if updates:
                    updates.append("updated_at = ?")
                    params.append(self._now())
                    params.append(user_id)
                    statement = f"UPDATE users SET {', '.join(updates)} WHERE id = ?"
                    self._conn.execute(statement, params)
                row = self._fetch_user_locked(user_id)
        except sqlite3.IntegrityError as exc:
            raise UserAlreadyExists() from exc
        return self._row_to_user(row) if row else None

    def append_user_pet(self, user_id: int, pet_id: int) -> Optional[User]:
        with self._lock, self._conn:
            row = self._fetch_user_locked(user_id)
            if not row:
                return None
            pets = json.loads(row["pets"])
            if pet_id not in pets:
                pets.append(pet_id)
                self._conn.execute(
                    "UPDATE users SET pets = ?, updated_at = ? WHERE id = ?",
                    (json.dumps(pets), self._now(), user_id),
                )
                row = self._fetch_user_locked(user_id)
        return self._row_to_user(row)

    def add_user_documents(self, user_id: int, documents: Sequence[UserDocument]) -> Optional[User]:
        with self._lock, self._conn:
            row = self._fetch_user_locked(user_id)
            if not row:
                return None
            stored = json.loads(row["documents"])
            stored.extend({"name": item.name, "reference": item.reference} for item in documents)
            self._conn.execute(
                "UPDATE users SET documents = ?, updated_at = ? WHERE id = ?",
                (json.dumps(stored, ensure_ascii=False), self._now(), user_id),
            )
            row = self._fetch_user_locked(user_id)
        return self._row_to_user(row)

    def delete_user(self, user_id: int) -> bool:
        """Delete a user that owns no pets.

        Raises UserHasPets while any pet still has the user as its owner.
        """
        with self._lock, self._conn:
            owned = self._conn.execute(
                "SELECT 1 FROM pets WHERE owner_id = ? LIMIT 1", (user_id,)
            ).fetchone()
            if owned:
                raise UserHasPets()
            cur = self._conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            return cur.rowcount > 0

    # PetRepository API -----------------------------------------------------
    def get_pet(self, pet_id: int) -> Optional[Pet]:
        with self._lock:
            row = self._fetch_pet_locked(pet_id)
        return self._row_to_pet(row) if row else None

    def list_pets(
        self,
        species: Optional[PetSpecies] = None,
        adopted: Optional[bool] = None,
    ) -> List[Pet]:
        query = "SELECT * FROM pets"
        clauses = []
        params: List[Any] = []
        if species is not None:
            clauses.append("species = ?")
            params.append(PetSpecies(species).value)
        if adopted is not None:
            clauses.append("adopted = ?")
            params.append(int(adopted))
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY id ASC"
        with self._lock:
            cur = self._conn.execute(query, params)
            rows = cur.fetchall()
        return [self._row_to_pet(row) for row in rows]

    def create_pet(
        self,
        name: str,
        species: PetSpecies,
        breed: Optional[str] = None,
        age: Optional[int] = None,
        description: Optional[str] = None,
        image: Optional[str] = None,
    ) -> Pet:
        now = self._now()
        with self._lock, self._conn:
            cur = self._conn.execute(
                """
                INSERT INTO pets (
                    name, species, breed, age, description, image,
                    adopted, owner_id, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, 0, NULL, ?, ?)
                """,
                (name, PetSpecies(species).value, breed, age, description, image, now, now),
            )
            row = self._fetch_pet_locked(cur.lastrowid)
        if not row:
            raise RuntimeError("Failed to persist pet.")
        return self._row_to_pet(row)

    def update_pet(
        self,
        pet_id: int,
        *,
        name: Optional[str] = None,
        species: Optional[PetSpecies] = None,
        breed: Optional[str] = None,
        age: Optional[int] = None,
        description: Optional[str] = None,
        image: Optional[str] = None,
    ) -> Optional[Pet]:
        updates = []
        params: List[Any] = []
        if name is not None:
            updates.append("name = ?")
            params.append(name)
        if species is not None:
            updates.append("species = ?")
            params.append(PetSpecies(species).value)
        if breed is not None:
            updates.append("breed = ?")
            params.append(breed)
        if age is not None:
            updates.append("age = ?")
            params.append(age)
        if description is not None:
            updates.append("description = ?")
            params.append(description)
        if image is not None:
            updates.append("image = ?")
            params.append(image)

        with self._lock, self._conn:
            if updates:
                updates.append("updated_at = ?")
                params.append(self._now())
                params.append(pet_id)
                statement = f"UPDATE pets SET {', '.join(updates)} WHERE id = ?"
                self._conn.execute(statement, params)
            row = self._fetch_pet_locked(pet_id)
        return self._row_to_pet(row) if row else None

    def claim_pet(self, pet_id: int, owner_id: int) -> bool:
        with self._lock, self._conn:
            cur = self._conn.execute(
                """
                UPDATE pets SET adopted = 1, owner_id = ?, updated_at = ?
                WHERE id = ? AND adopted = 0
                """,
                (owner_id, self._now(), pet_id),
            )
            return cur.rowcount == 1

    def delete_pet(self, pet_id: int) -> bool:
        with self._lock, self._conn:
            cur = self._conn.execute("DELETE FROM pets WHERE id = ?", (pet_id,))
            return cur.rowcount > 0

    # AdoptionRepository API ------------------------------------------------
    def get_adoption(self, adoption_id: int) -> Optional[Adoption]:
        with self._lock:
            row = self._fetch_adoption_locked(adoption_id)
        return self._row_to_adoption(row) if row else None

    def list_adoptions(self, owner_id: Optional[int] = None) -> List[Adoption]:
        query = "SELECT * FROM adoptions"
        params: List[Any] = []
        if owner_id is not None:
            query += " WHERE owner_id = ?"
            params.append(owner_id)
        query += " ORDER BY id ASC"
        with self._lock:
            cur = self._conn.execute(query, params)
            rows = cur.fetchall()
        return [self._row_to_adoption(row) for row in rows]

    def find_adoption(self, owner_id: int, pet_id: int) -> Optional[Adoption]:
        with self._lock:
            cur = self._conn.execute(
                "SELECT * FROM adoptions WHERE owner_id = ? AND pet_id = ? ORDER BY id DESC",
                (owner_id, pet_id),
            )
            row = cur.fetchone()
        return self._row_to_adoption(row) if row else None

    def create_adoption(
        self,
        owner_id: int,
        pet_id: int,
        status: AdoptionStatus = AdoptionStatus.PENDING,
    ) -> Adoption:
        now = self._now()
        with self._lock, self._conn:
            cur = self._conn.execute(
                """
                INSERT INTO adoptions (owner_id, pet_id, status, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (owner_id, pet_id, AdoptionStatus(status).value, now, now),
            )
            row = self._fetch_adoption_locked(cur.lastrowid)
        if not row:
            raise RuntimeError("Failed to persist adoption.")
        return self._row_to_adoption(row)

    def update_adoption_status(
        self,
        adoption_id: int,
        status: AdoptionStatus,
        expected: AdoptionStatus = AdoptionStatus.PENDING,
    ) -> Optional[Adoption]:
        """Move an adoption to `status` only if it is still in `expected`.

        Returns None when no row matched, either because the adoption does not
        exist or because another update already moved it.
        """
        with self._lock, self._conn:
            cur = self._conn.execute(
                "UPDATE adoptions SET status = ?, updated_at = ? WHERE id = ? AND status = ?",
                (
                    AdoptionStatus(status).value,
                    self._now(),
                    adoption_id,
                    AdoptionStatus(expected).value,
                ),
            )
            if cur.rowcount == 0:
                return None
            row = self._fetch_adoption_locked(adoption_id)
        return self._row_to_adoption(row) if row else None

    # Helpers ----------------------------------------------------------------
    def _fetch_user_locked(self, user_id: int) -> Optional[sqlite3.Row]:
        cur = self._conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
        return cur.fetchone()

    def _fetch_pet_locked(self, pet_id: int) -> Optional[sqlite3.Row]:
        cur = self._conn.execute("SELECT * FROM pets WHERE id = ?", (pet_id,))
        return cur.fetchone()

    def _fetch_adoption_locked(self, adoption_id: int) -> Optional[sqlite3.Row]:
        cur = self._conn.execute("SELECT * FROM adoptions WHERE id = ?", (adoption_id,))
        return cur.fetchone()

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).replace(microsecond=0).isoformat()

    @staticmethod
    def _format_datetime(value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).replace(microsecond=0).isoformat()

    @staticmethod
    def _parse_datetime(value: str) -> datetime:
        result = datetime.fromisoformat(value)
        if result.tzinfo is None:
            return result.replace(tzinfo=timezone.utc)
        return result.astimezone(timezone.utc)

    def _row_to_user(self, row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            password_hash=row["password_hash"],
            role=Role(row["role"]),
            pets=list(json.loads(row["pets"])),
            documents=[UserDocument(**item) for item in json.loads(row["documents"])],
            last_connection=self._parse_datetime(row["last_connection"])
            if row["last_connection"]
            else None,
            created_at=self._parse_datetime(row["created_at"]),
            updated_at=self._parse_datetime(row["updated_at"]),
        )

    def _row_to_pet(self, row: sqlite3.Row) -> Pet:
        return Pet(
            id=row["id"],
            name=row["name"],
            species=PetSpecies(row["species"]),
            breed=row["breed"],
            age=row["age"],
            description=row["description"],
            image=row["image"],
            adopted=bool(row["adopted"]),
            owner=row["owner_id"],
            created_at=self._parse_datetime(row["created_at"]),
            updated_at=self._parse_datetime(row["updated_at"]),
        )

    def _row_to_adoption(self, row: sqlite3.Row) -> Adoption:
        return Adoption(
            id=row["id"],
            owner=row["owner_id"],
            pet=row["pet_id"],
            status=AdoptionStatus(row["status"]),
            created_at=self._parse_datetime(row["created_at"]),
            updated_at=self._parse_datetime(row["updated_at"]),
        )
