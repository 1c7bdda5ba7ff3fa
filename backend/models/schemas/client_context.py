from pydantic import BaseModel


class ClientContext(BaseModel):
    """Caller identity passed explicitly into the publish gate."""
    client_id: str
