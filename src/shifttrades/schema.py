"""Trade and summary records plus the upload response envelope"""
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional
import json


@dataclass(frozen=True)
class Trade:
    id: str
    person1: str
    date: str
    hours: float
    person2: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PersonSummary:
    name: str
    you_worked: float = 0.0
    they_worked: float = 0.0
    total: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        # camelCase keys are the wire format consumed by the dashboard
        return {
            'name': self.name,
            'youWorked': self.you_worked,
            'theyWorked': self.they_worked,
            'total': self.total,
        }


@dataclass
class ParseResult:
    success: bool
    message: str
    trades: List[Trade] = field(default_factory=list)
    # exception class behind a failure; not part of the wire format
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, trades: List[Trade]) -> 'ParseResult':
        return cls(success=True, trades=list(trades), message=f'Successfully loaded {len(trades)} trades')

    @classmethod
    def failure(cls, message: str, error_type: Optional[str] = None) -> 'ParseResult':
        return cls(success=False, message=message, error_type=error_type)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {'success': False, 'message': self.message}
        return {
            'success': True,
            'trades': [t.to_dict() for t in self.trades],
            'message': self.message,
        }

    def to_json(self, indent=2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
