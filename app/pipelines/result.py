import json
from dataclasses import dataclass, field

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class PipelineResult:
    status_code: int
    payload: dict = field(default_factory=dict)

    def to_lambda_response(self) -> dict:
        """API Gateway proxy response shape."""
        return {
            "statusCode": self.status_code,
            "headers": dict(JSON_HEADERS),
            "body": json.dumps(self.payload, ensure_ascii=False),
        }
