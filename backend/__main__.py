"""
Run the transform API with ``python -m backend``.

The command line tool is installed separately as ``workout-sync``.
"""
import uvicorn

if __name__ == "__main__":
    uvicorn.run("backend.main:app", host="127.0.0.1", port=8001, reload=True)
