from contextlib import contextmanager

from fastapi import HTTPException

from checkcx.exceptions import DuplicateRecordError, RecordNotFoundError, ValidationError
from checkcx.services.error_messages import normalize_error_message


@contextmanager
def domain_errors():
    """Translate service exceptions raised inside the block into HTTPException."""
    try:
        yield
    except ValidationError as e:
        raise HTTPException(status_code=400, detail={"field": e.field, "message": e.message})
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=f"{e.table} not found")
    except DuplicateRecordError as e:
        raise HTTPException(status_code=409, detail=normalize_error_message(str(e)))
