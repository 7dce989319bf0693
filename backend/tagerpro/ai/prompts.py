# Prompt templates for the AI tools, one English and one Arabic variant each.
# Required fields are substituted directly; optional fields are substituted
# through their fragment, which is dropped entirely when the value is blank.

DESCRIPTION_PROMPTS = {
    "en": (
        "Write a compelling marketing description for the following product: "
        "{productName}{category}. Keep it 2-3 sentences, engaging and persuasive."
    ),
    "ar": (
        "اكتب وصفاً تسويقياً جذاباً ومقنعاً للمنتج التالي باللغة العربية: "
        "{productName}{category}. الوصف يجب أن يكون 2-3 جمل قصيرة ومؤثرة."
    ),
}

DESCRIPTION_FRAGMENTS = {
    "en": {"category": " in the {value} category"},
    "ar": {"category": " في فئة {value}"},
}

AD_COPY_PROMPTS = {
    "en": (
        "Write a short, catchy ad copy for the following product:\n"
        "Product: {productName}\n"
        "Price: {price}\n"
        "{offer}"
        "Make it suitable for social media advertising (2-3 sentences)."
    ),
    "ar": (
        "اكتب نص إعلاني قصير وجذاب للمنتج التالي باللغة العربية:\n"
        "المنتج: {productName}\n"
        "السعر: {price}\n"
        "{offer}"
        "النص يجب أن يكون مناسباً للإعلان على وسائل التواصل الاجتماعي (2-3 جمل)."
    ),
}

AD_COPY_FRAGMENTS = {
    "en": {"offer": "Offer: {value}\n"},
    "ar": {"offer": "العرض: {value}\n"},
}

PRICE_PROMPTS = {
    "en": (
        "Suggest a suitable price range for the following product with a brief explanation:\n"
        "Product: {productName}\n"
        "{description}"
        "{category}"
        "Give me the suggested price in USD with a brief explanation (2-3 sentences)."
    ),
    "ar": (
        "اقترح نطاق سعري مناسب للمنتج التالي مع شرح موجز:\n"
        "المنتج: {productName}\n"
        "{description}"
        "{category}"
        "أعطني السعر المقترح بالدولار مع شرح مختصر (2-3 جمل)."
    ),
}

PRICE_FRAGMENTS = {
    "en": {"description": "Description: {value}\n", "category": "Category: {value}\n"},
    "ar": {"description": "الوصف: {value}\n", "category": "الفئة: {value}\n"},
}

CAMPAIGN_PROMPTS = {
    "en": (
        "Suggest 3 marketing campaign ideas for the following product:\n"
        "Product: {productName}\n"
        "{targetAudience}"
        "Each idea should include: campaign title, main concept, and suggested channel "
        "(Facebook, Instagram, WhatsApp, etc.)."
    ),
    "ar": (
        "اقترح 3 أفكار لحملات تسويقية للمنتج التالي باللغة العربية:\n"
        "المنتج: {productName}\n"
        "{targetAudience}"
        "كل فكرة يجب أن تتضمن: عنوان الحملة، الفكرة الرئيسية، والقناة المقترحة "
        "(فيسبوك، إنستغرام، واتساب، إلخ)."
    ),
}

CAMPAIGN_FRAGMENTS = {
    "en": {"targetAudience": "Target Audience: {value}\n"},
    "ar": {"targetAudience": "الجمهور المستهدف: {value}\n"},
}
