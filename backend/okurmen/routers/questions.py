from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ..deps import get_bank
from ..services.questions import image_content_type, load_image
from ..stores import QuestionBank

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("/{question_id}/image")
def get_question_image(question_id: int, bank: QuestionBank = Depends(get_bank)):
	image = load_image(bank, question_id)
	return Response(
		content=image.content,
		media_type=image_content_type(image.filename),
		headers={"Content-Disposition": f"inline; filename*=UTF-8''{quote(image.filename)}"},
	)
