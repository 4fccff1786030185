import uvicorn
import os

from jobhub.core.config import settings

if __name__ == "__main__":
    # port from the environment (default: 8081)
    port = int(os.getenv("PORT", 8081))

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        log_level=settings.log_level.lower()
    )
