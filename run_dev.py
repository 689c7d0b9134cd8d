# run_dev.py
"""
Local development launcher for FastAPI.
Equivalent to: `uvicorn dummydata.app:app --reload --host 0.0.0.0 --port 8000`

Set LLM_PROVIDER=echo to run without an API key.
"""

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "dummydata.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
