# api.py
from typing import Optional

print("[API] Booting FastAPI...")

from fastapi import FastAPI, APIRouter, Depends, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from risk_analyzer.config import Settings, load_settings

try:
    from risk_analyzer.core.analyze import analyze_address
    print("[API] Import analyze_address: OK")
except Exception as e:
    print("[API] Import analyze_address: FAIL ->", e)
    raise

from risk_analyzer.errors import InvalidAddressError, UnsupportedTargetError
from risk_analyzer.utils.explorer import ExplorerClient
from risk_analyzer.utils.goplus import TokenSecurityClient

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def get_explorer(settings: Settings = Depends(get_settings)) -> ExplorerClient:
    return ExplorerClient(settings)


def get_token_client(settings: Settings = Depends(get_settings)) -> TokenSecurityClient:
    return TokenSecurityClient(settings)


app = FastAPI(title="Contract Risk Analyzer API", version="0.4.0")
print("[API] FastAPI instance created.")

# CORS (agent/plugin front-ends call this cross-origin)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
print("[API] CORS middleware registered.")

api = APIRouter(prefix="/api")
print("[API] APIRouter created at /api.")


@api.get("/health")
def health():
    print("[API] GET /api/health")
    return {"ok": True}


@api.get("/tools/risk-analyzer")
def risk_analyzer(
    address: Optional[str] = Query(default=None, description="Ethereum contract address"),
    settings: Settings = Depends(get_settings),
    explorer: ExplorerClient = Depends(get_explorer),
    token_client: TokenSecurityClient = Depends(get_token_client),
):
    print(f"[API] GET /api/tools/risk-analyzer?address={address} -> start")
    if not address or not address.strip():
        print("[API] /risk-analyzer error: missing address")
        return JSONResponse(status_code=400, content={"error": "Address parameter is required"})

    try:
        metrics = analyze_address(address, settings=settings, explorer=explorer, token_client=token_client)
    except InvalidAddressError as ve:
        print(f"[API] /risk-analyzer invalid address={address} -> {ve}")
        return JSONResponse(status_code=400, content={"error": "Address parameter is required", "message": str(ve)})
    except UnsupportedTargetError as ue:
        print(f"[API] /risk-analyzer unsupported address={address} -> {ue.error} ({ue.status_code})")
        return JSONResponse(status_code=ue.status_code, content=ue.to_payload())
    except Exception as e:
        print(f"[API] /risk-analyzer ERROR address={address} -> {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to perform risk analysis"})

    print(f"[API] /risk-analyzer OK address={address} overall={metrics.overall_risk:.3f}")
    return metrics.to_dict()


app.include_router(api)
print("[API] Router included.")
