"""QR code generation for gate verification links."""
import qrcode
import io
import base64

class QRService:
    """Service for QR code operations."""

    @staticmethod
    def generate_qr_data_url(content: str) -> str:
        """Render ``content`` as a PNG QR code and return it as a data URL."""
        qr = qrcode.QRCode(
            version=None,  # Auto-determine size
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(content)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffered = io.BytesIO()
        img.save(buffered, format="PNG")
        img_str = base64.b64encode(buffered.getvalue()).decode()

        return f"data:image/png;base64,{img_str}"
