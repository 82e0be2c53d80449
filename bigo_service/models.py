"""
Pydantic models for the Big-O Lens API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from bigo.models import AnalysisReport


class AnalyzeRequest(BaseModel):
    """Request payload for code analysis."""
    code: str = Field(..., description="Source code to analyze")
    language: str = Field(default="auto", description="Programming language (auto for detection)")
    filename: str = Field(default="untitled", description="Current filename")

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        v = v.strip()
        if not v:
            return "auto"
        if len(v) > 32:
            raise ValueError("Language tag too long")
        return v


class AnalysisSummary(BaseModel):
    """Presentation helpers derived from the overall class."""
    notation: str = Field(..., description="Big-O notation (e.g., O(n), O(n²))")
    description: str = Field(..., description="Brief description of the class")
    rating: str = Field(..., description="Performance rating")
    functionCount: int = Field(..., ge=0)
    averageConfidence: float = Field(..., ge=0.0, le=1.0)


class AnalyzeResponse(BaseModel):
    """API response wrapper."""
    success: bool = Field(default=True)
    result: AnalysisReport
    summary: AnalysisSummary


class LanguagesResponse(BaseModel):
    languages: list[str]


class ErrorResponse(BaseModel):
    """Error response."""
    success: bool = Field(default=False)
    error: str = Field(..., description="Error message")
    details: Optional[str] = Field(default=None, description="Additional error details")
