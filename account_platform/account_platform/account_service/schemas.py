from pydantic import AnyHttpUrl, BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, ValidationError, field_validator

from typing import Optional

_http_url = TypeAdapter(AnyHttpUrl)


class RegisterAccountRequest(BaseModel):
    name: str = Field(..., min_length=1)
    username: str = Field(..., min_length=3)
    email: EmailStr
    password: str = Field(..., min_length=8)

    @field_validator("password")
    @classmethod
    def password_without_null_bytes(cls, value: str) -> str:
        # bcrypt cannot hash NUL characters
        if "\x00" in value:
            raise ValueError("Password must not contain null characters.")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    bio: Optional[str] = Field(default=None, max_length=160)
    country: Optional[str] = Field(default=None, max_length=50)
    state: Optional[str] = Field(default=None, max_length=50)
    city: Optional[str] = Field(default=None, max_length=50)
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl")

    @field_validator("avatar_url")
    @classmethod
    def avatar_url_is_http_url(cls, value: Optional[str]) -> Optional[str]:
        """Validate as an http(s) URL but keep the string the client sent."""
        if value is None:
            return value
        try:
            _http_url.validate_python(value)
        except ValidationError:
            raise ValueError("Avatar URL must be a well-formed http(s) URL.") from None
        return value

    def changed_fields(self) -> dict:
        """Fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True, by_alias=False)


class AuthResponse(BaseModel):
    message: str
    token: str
    accountId: str


class MessageResponse(BaseModel):
    message: str


class ProfileResponse(BaseModel):
    bio: str
    country: str
    state: str
    city: str
    avatarUrl: str
