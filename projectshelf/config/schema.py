# projectshelf/config/schema.py
from pydantic import BaseModel, Field
from typing import Optional

DEFAULT_EXPLORER_URL = "https://explorer.devnet.moved.network"

class AppConfig(BaseModel):
    backend: str = "supabase" # Registered backend name: "supabase" or "memory"
    supabase_url: Optional[str] = None # e.g. https://<ref>.supabase.co
    supabase_key: Optional[str] = None # anon or service key, sent as apikey + bearer
    projects_table: str = "projects"
    owner_column: str = "user_id"
    owner_id: Optional[str] = None # Signed-in user's profile id, if known
    rows_file: Optional[str] = None # JSON rows for the memory backend
    explorer_base_url: str = DEFAULT_EXPLORER_URL
    request_timeout: Optional[float] = Field(default=None, gt=0) # Seconds; None means no timeout
