import base64
from io import BytesIO

import qrcode


def render_qr_png_base64(data: str) -> str:
    """Render `data` as a PNG QR code and return it base64-encoded."""
    qr = qrcode.QRCode(version=1, box_size=10, border=4)
    qr.add_data(data)
    qr.make(fit=True)
    qr_img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    qr_img.save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode()
