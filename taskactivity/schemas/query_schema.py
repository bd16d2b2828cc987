from pydantic import BaseModel, field_validator


class QueryExecutionRequest(BaseModel):
    query: str

    @field_validator("query")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Query cannot be empty")
        return v
