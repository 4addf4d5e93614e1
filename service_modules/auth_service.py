"""
Auth Service - handles user authentication and registration.
"""
from .base import (
    HTTPException, logging,
    get_db_session, UserORM, ROLE_USER, ROLE_TRAINER
)
from auth import verify_password, get_password_hash, create_user_token

logger = logging.getLogger("fitness_tracker")


class AuthService:
    """Service for managing authentication and user registration."""

    def authenticate_user(self, email: str, password: str):
        """Authenticate a user by email and password."""
        db = get_db_session()
        try:
            user = db.query(UserORM).filter(UserORM.email == email).first()
            if not user:
                return False
            if not verify_password(password, user.hashed_password):
                return False
            return user
        finally:
            db.close()

    def login(self, email: str, password: str) -> dict:
        user = self.authenticate_user(email, password)
        if not user:
            logger.info(f"Failed login for {email}")
            raise HTTPException(status_code=401, detail="Invalid email or password.")

        return {
            "access_token": create_user_token(user),
            "token_type": "bearer",
            "user_id": user.id,
            "role": user.role
        }

    def register_user(self, user_data: dict):
        """Register a new user."""
        logger.debug(f"register_user called for {user_data.get('email')}")

        if user_data["password"] != user_data.get("confirm_password"):
            raise HTTPException(status_code=400, detail="Passwords do not match.")

        role = user_data.get("role") or ROLE_USER
        if role not in (ROLE_USER, ROLE_TRAINER):
            raise HTTPException(status_code=400, detail="Role must be 'User' or 'Trainer'.")

        email = user_data["email"].strip()

        db = get_db_session()
        try:
            if db.query(UserORM).filter(UserORM.email == email).first():
                raise HTTPException(status_code=400, detail="This email is already registered.")

            new_user = UserORM(
                name=user_data["name"],
                email=email,
                hashed_password=get_password_hash(user_data["password"]),
                role=role
            )

            db.add(new_user)
            db.commit()
            db.refresh(new_user)

            logger.info(f"Registered {role} account {new_user.id}")
            return {"status": "success", "message": "Account created successfully.", "user_id": new_user.id}
        except HTTPException:
            raise
        except Exception as e:
            db.rollback()
            raise HTTPException(status_code=500, detail=f"Registration failed: {str(e)}")
        finally:
            db.close()


# Singleton instance
auth_service = AuthService()

def get_auth_service() -> AuthService:
    """Dependency injection helper."""
    return auth_service
