import os

import uvicorn


def main():
    uvicorn.run(
        "eventdesk.main:app",
        host=os.getenv("HOST", "localhost"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD") == "1",
    )


if __name__ == "__main__":
    main()
