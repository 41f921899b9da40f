"""Prompt builders for thumbnail enhancement and generation."""

_EXAMPLE_PORTRAIT = (
    '"A photorealistic close-up portrait of an elderly Japanese ceramicist with deep, sun-etched '
    "wrinkles and a warm, knowing smile. He is carefully inspecting a freshly glazed tea bowl. The "
    "setting is his rustic, sun-drenched workshop. The scene is illuminated by soft, golden hour light "
    "streaming through a window, highlighting the fine texture of the clay. Captured with an 85mm "
    "portrait lens, resulting in a soft, blurred background (bokeh). The overall mood is serene and "
    'masterful. Vertical portrait orientation."'
)

_EXAMPLE_EDIT = (
    '"Using the provided image of a living room, change only the blue sofa to be a vintage, brown '
    "leather chesterfield sofa. Keep the rest of the room, including the pillows on the sofa and the "
    'lighting, unchanged."'
)

_DESCRIPTIVE_ELEMENTS = (
    "- Visual details about subjects and environment\n"
    "- Lighting and atmosphere (e.g., golden hour, dramatic shadows)\n"
    "- Camera and lens specifics (e.g., focal length, depth of field, bokeh)\n"
    "- Composition and orientation (e.g., close-up, portrait, wide-angle)\n"
    "- Mood or emotional tone (e.g., serene, energetic, mysterious)\n"
    "- Material textures, colors, and any relevant contextual info\n"
)


def build_enhancement_prompt(user_prompt: str) -> str:
    """Return the text-model prompt that rewrites the user's query into a vivid thumbnail brief."""
    return (
        "You are a helpful assistant that enhances user queries to make them clear, detailed, and "
        "precise while preserving the original intent. Your enhanced prompts should be tailored "
        "specifically for generating high-quality, realistic thumbnails using the Gemini image "
        "preview model.\n\n"
        "When enhancing, add vivid descriptive elements such as:\n"
        f"{_DESCRIPTIVE_ELEMENTS}"
        "- Subtle, relevant image icons or elements softly integrated into the background to make "
        "the thumbnail appear more realistic and visually rich, without overpowering the main subject.\n\n"
        "Also:\n"
        "- Remove the background from the source image to isolate the main subject.\n"
        "- Use this isolated subject image as the primary visual element for the thumbnail.\n"
        "- Harmoniously blend the isolated subject with the enhanced textual prompt and added "
        "background icons.\n\n"
        f"Example enhanced prompt:\n{_EXAMPLE_PORTRAIT}\n\n"
        "Now, enhance the following user query into a detailed, vivid prompt for thumbnail generation "
        "that includes isolated subject image and subtle background icons to enhance realism:\n\n"
        f'Query: "{user_prompt}"'
    )


def build_generation_prompt(user_prompt: str) -> str:
    """Return the instruction sent alongside the source image to the image model."""
    return (
        "You are a helpful assistant that enhances user queries to make them clear, detailed, and "
        "precise while preserving the original intent. Your enhanced prompts should be tailored "
        "specifically for generating high-quality images or thumbnails using the Gemini image "
        "preview model.\n\n"
        "When enhancing, add vivid descriptive elements such as:\n"
        f"{_DESCRIPTIVE_ELEMENTS}\n"
        "Additionally, before generating the thumbnail:\n"
        "- Remove the background from the source image to isolate the main subject.\n"
        "- Use this isolated subject image as the primary visual element for the thumbnail.\n"
        "- Ensure the thumbnail visually integrates the isolated subject with the enhanced prompt "
        "details harmoniously.\n\n"
        f"Example enhanced prompts:\n{_EXAMPLE_PORTRAIT}\n{_EXAMPLE_EDIT}\n\n"
        "Now, enhance the following user query into a detailed, vivid prompt for image or thumbnail "
        "generation, incorporating the isolated subject image after background removal:\n\n"
        f'Query: "{user_prompt}"'
    )
