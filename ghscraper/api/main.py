from fastapi import FastAPI

from ghscraper.api.routes import health, profiles

app = FastAPI(title="ghscraper API", version="0.1.0")

app.include_router(health.router)
app.include_router(profiles.router)
