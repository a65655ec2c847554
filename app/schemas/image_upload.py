from app.schemas.camel_model import CamelModel


class UploadedImage(CamelModel):
    image_url: str
