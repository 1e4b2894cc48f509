"""
API routes for the mortgage simulator.
"""

from fastapi import APIRouter

from mortgage_sim.api import calculations

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
