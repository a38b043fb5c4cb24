"""
Stand-in for the third-party email validation service, used by docker-compose.

Emails containing "invalid" are declined; emails containing "error" get a 500.
Everything else is valid.
"""

from fastapi import FastAPI, HTTPException

app = FastAPI(title="Validator stub")


@app.get("/api/validate")
async def validate(email: str):
    if "error" in email:
        raise HTTPException(status_code=500, detail="Validator failure")
    return {"valid": "invalid" not in email}
