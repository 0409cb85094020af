from fastapi import Depends, HTTPException, APIRouter, status
from sqlalchemy.orm import Session
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm

from auth import create_access_token, verify_password, verify_token
from database import get_db
from models import Token, User, UserDB

user_router = APIRouter(
    tags=["User"]
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="user/token", auto_error=False)

@user_router.post("/user/token", response_model=Token, tags=["User"])
def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = db.query(UserDB).filter(UserDB.username == form_data.username).first()

    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.verified:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account not verified",
        )

    access_token = create_access_token(data={"sub": user.username})
    return {"access_token": access_token, "token_type": "bearer"}

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)):
    username = verify_token(token) if token else None
    user = db.query(UserDB).filter(UserDB.username == username).first() if username else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user

def require_admin(current_user: UserDB = Depends(get_current_user)):
    if current_user.role != "admin" or not current_user.verified:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user

@user_router.get("/user/me", response_model=User, tags=["User"])
def read_users_me(current_user: UserDB = Depends(get_current_user)):
    return current_user
