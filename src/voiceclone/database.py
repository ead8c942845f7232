import uuid
from collections.abc import AsyncGenerator
from datetime import datetime

from passlib.context import CryptContext
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Mapped, declarative_base, mapped_column, relationship

from voiceclone.api.settings import get_settings

Base = declarative_base()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    projects = relationship("VoiceProject", back_populates="user")

    def verify_password(self, password: str) -> bool:
        """Verify a password against the hash."""
        return pwd_context.verify(password, self.hashed_password)

    @classmethod
    def hash_password(cls, password: str) -> str:
        """Hash a password for storing."""
        return pwd_context.hash(password)


class VoiceProject(Base):
    """Named container grouping a user's voice samples and generated audio."""

    __tablename__ = "voice_projects"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    user = relationship("User", back_populates="projects")
    samples = relationship("VoiceSample", back_populates="project")
    generated_audio = relationship("GeneratedAudio", back_populates="project")

    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="ck_voice_projects_name_not_blank"),
    )


class VoiceSample(Base):
    """A recorded clip uploaded as cloning input. Immutable once written."""

    __tablename__ = "voice_samples"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("voice_projects.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    audio_url: Mapped[str] = mapped_column(String, nullable=False)
    duration_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    project = relationship("VoiceProject", back_populates="samples")

    __table_args__ = (Index("idx_samples_project_created", "project_id", "created_at"),)


class GeneratedAudio(Base):
    """Synthesized speech for a piece of input text. Immutable once written."""

    __tablename__ = "generated_audio"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("voice_projects.id"), nullable=False
    )
    text_input: Mapped[str] = mapped_column(Text, nullable=False)
    audio_url: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    project = relationship("VoiceProject", back_populates="generated_audio")

    __table_args__ = (Index("idx_generated_project_created", "project_id", "created_at"),)


settings = get_settings()
engine = create_async_engine(settings.database_url, echo=settings.database_echo, future=True)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()

