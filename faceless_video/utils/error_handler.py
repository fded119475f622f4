"""Error Handler - provides user-friendly error messages and graceful degradation."""

from typing import Optional


def format_error_message(
    operation: str,
    error: Exception,
    context: Optional[dict] = None,
    suggestion: Optional[str] = None,
) -> str:
    """
    Format a user-friendly error message.

    Args:
        operation: What operation was being performed (e.g., "Normalizing asset")
        error: The exception that occurred
        context: Additional context (e.g., {"asset": "clip.mp4", "stage": "normalize"})
        suggestion: Optional suggestion for how to fix the issue

    Returns:
        Formatted error message
    """
    error_type = type(error).__name__
    error_msg = str(error)

    context_str = ""
    if context:
        context_parts = [f"{k}={v}" for k, v in context.items()]
        context_str = f" ({', '.join(context_parts)})"

    message = f"❌ {operation} failed{context_str}\n"
    message += f"   Error: {error_type}: {error_msg}"

    if suggestion:
        message += f"\n   💡 Suggestion: {suggestion}"

    return message


def get_fallback_suggestion(service: str, error: Exception) -> Optional[str]:
    """
    Get a suggestion for how to handle a service failure.

    Args:
        service: Service name ("TTS", "Music", "Asset Normalization", "Transcoding", "Publishing")
        error: The exception

    Returns:
        Suggestion string or None
    """
    error_msg = str(error).lower()

    if service == "TTS":
        if "api key" in error_msg or "not configured" in error_msg:
            return "Check your TTS settings in .env file. Falling back to silent narration."
        elif "rate limit" in error_msg or "429" in error_msg:
            return "Rate limit exceeded. Wait a few minutes and try again. Video will use silent narration."
        elif "network" in error_msg or "timeout" in error_msg or "timed out" in error_msg:
            return "Network error. Check your internet connection. Falling back to silent narration."
        else:
            return "TTS generation failed. Video will use silent narration sized from the script length."

    elif service == "Music":
        if "network" in error_msg or "timeout" in error_msg or "timed out" in error_msg:
            return "Network error. Drop an .mp3 into the music folder to avoid downloads."
        else:
            return "Music download failed. Trying the next source."

    elif service == "Asset Normalization":
        if "no assets" in error_msg:
            return "None of the assets could be transcoded. Check that they are valid video or image files."
        elif "no such file" in error_msg or "not found" in error_msg:
            return "Asset file disappeared during the run. Skipping it."
        else:
            return "Asset could not be transcoded (corrupt or unsupported). Skipping it."

    elif service == "Transcoding":
        if "timed out" in error_msg:
            return "ffmpeg did not finish in time. Raise FFMPEG_TIMEOUT_SECONDS or check the input media."
        elif "not found" in error_msg or "no such file" in error_msg:
            return "ffmpeg binary not found. Install ffmpeg or set FFMPEG_BINARY."
        elif "drawtext" in error_msg or "font" in error_msg:
            return "Caption rendering failed. Set CAPTION_FONT_FILE to a TrueType font."
        else:
            return "ffmpeg failed. Check the log for the command and its stderr output."

    elif service == "Publishing":
        if "permission" in error_msg:
            return "Output directory is not writable. Check its permissions or pass a different --output-dir."
        elif "no space" in error_msg:
            return "Disk is full. Free some space in the output directory and run again."
        else:
            return "Could not move the finished files into the output directory. Nothing was published."

    return None
