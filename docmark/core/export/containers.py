"""
Containers wrapping a rasterized document: workbook, Word document and
mail envelope.
"""
import io
from email.mime.image import MIMEImage
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

MAIL_SUBJECT = "Annotated Message"
MAIL_ADDRESS = "example@example.com"
IMAGE_CONTENT_ID = "annotated-image"
SCREEN_DPI = 96


def build_workbook(png_bytes: bytes, sheet_title: str = "Annotated") -> bytes:
    """Workbook with the image anchored at A1 of a single sheet."""
    from openpyxl import Workbook
    from openpyxl.drawing.image import Image

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_title
    sheet.add_image(Image(io.BytesIO(png_bytes)), "A1")

    output = io.BytesIO()
    workbook.save(output)
    return output.getvalue()


def build_word_document(png_bytes: bytes, width_px: int) -> bytes:
    """Word document holding the image, scaled down to the text column."""
    from docx import Document
    from docx.shared import Inches

    document = Document()
    section = document.sections[0]
    usable_width = section.page_width - section.left_margin - section.right_margin
    width = min(Inches(width_px / SCREEN_DPI), usable_width)
    document.add_picture(io.BytesIO(png_bytes), width=width)

    output = io.BytesIO()
    document.save(output)
    return output.getvalue()


def build_mail_envelope(png_bytes: bytes) -> bytes:
    """
    Minimal multipart/related message: an HTML part referencing the image by
    content-id and the inline image part.
    """
    message = MIMEMultipart("related")
    message["Subject"] = MAIL_SUBJECT
    message["From"] = MAIL_ADDRESS
    message["To"] = MAIL_ADDRESS

    message.attach(MIMEText(
        f'<html><body><img src="cid:{IMAGE_CONTENT_ID}" /></body></html>',
        "html",
        "utf-8",
    ))

    image = MIMEImage(png_bytes, "png")
    image.add_header("Content-ID", f"<{IMAGE_CONTENT_ID}>")
    image.add_header("Content-Disposition", "inline", filename="annotated.png")
    message.attach(image)

    return message.as_bytes()
