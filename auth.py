from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt

from fastapi import Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from database import get_db
from models_orm import UserORM, ROLE_TRAINER, ROLE_USER
from config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

import bcrypt
import logging

logger = logging.getLogger("fitness_tracker")

def verify_password(plain_password, hashed_password):
    # bcrypt requires bytes for both
    pwd_bytes = plain_password.encode('utf-8')
    hashed_bytes = hashed_password.encode('utf-8')
    return bcrypt.checkpw(pwd_bytes, hashed_bytes)

def get_password_hash(password):
    # bcrypt requires bytes, returns bytes. We store as string.
    pwd_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pwd_bytes, salt)
    return hashed.decode('utf-8')

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt

def create_user_token(user: UserORM) -> str:
    return create_access_token({"sub": str(user.id), "role": user.role})

async def get_current_user(request: Request, db: Session = Depends(get_db)) -> UserORM:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    # Get token from Authorization header or cookie
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.replace("Bearer ", "", 1)
    else:
        token = request.cookies.get("access_token")

    if not token:
        logger.debug("AUTH: no token in header or cookie")
        raise credentials_exception

    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        user_id = payload.get("sub")
        if user_id is None:
            raise credentials_exception
        user_id = int(user_id)
    except (JWTError, ValueError) as e:
        logger.info(f"AUTH: token rejected: {e}")
        raise credentials_exception

    user = db.query(UserORM).filter(UserORM.id == user_id).first()
    if user is None:
        logger.info(f"AUTH: user {user_id} from token no longer exists")
        raise credentials_exception

    return user

def require_trainer(user: UserORM):
    if user.role != ROLE_TRAINER:
        raise HTTPException(status_code=403, detail="Only trainers can access this endpoint")

def require_client(user: UserORM):
    if user.role != ROLE_USER:
        raise HTTPException(status_code=403, detail="Only clients can access this endpoint")
