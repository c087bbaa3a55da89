"""Korean translation table."""

STRINGS: dict[str, str] = {
    # ---- Menus ----
    "&File": "파일(&F)",
    "&Edit": "편집(&E)",
    "&AI": "AI(&A)",
    "&Help": "도움말(&H)",
    "&Open Image...": "이미지 열기(&O)...",
    "&Export Meme": "밈 내보내기(&E)",
    "Set Gemini &API Key...": "Gemini API 키 설정(&A)...",
    "Choose Export &Folder...": "내보내기 폴더 선택(&F)...",
    "&Language": "언어(&L)",
    "Language will change after restart": "언어는 다시 시작한 후 적용됩니다",
    "&Quit": "종료(&Q)",
    "&Delete Caption": "캡션 삭제(&D)",
    "&Magic Caption": "매직 캡션(&M)",
    "&Analyze Image": "이미지 분석(&A)",
    "&About": "정보(&A)",
    "About": "정보",
    "Main": "메인",
    "Meme editor with Gemini-powered captions, analysis and image edits.":
        "Gemini 기반 캡션 추천, 이미지 분석, 이미지 편집을 지원하는 밈 편집기.",

    # ---- Source panel ----
    "Source": "소스",
    "Upload Image": "이미지 업로드",
    "Trending Templates": "인기 템플릿",
    "Open Image": "이미지 열기",

    # ---- Canvas ----
    "Upload an image or pick a template": "이미지를 업로드하거나 템플릿을 선택하세요",
    "Upload an image or pick a template to start": "이미지를 업로드하거나 템플릿을 선택해 시작하세요",
    "Analyzing pixels...": "픽셀 분석 중...",
    "Thinking of something funny...": "웃긴 문구 생각 중...",
    "Working magic on the image...": "이미지에 마법을 거는 중...",

    # ---- Tool panel ----
    "Captions": "캡션",
    "Style": "스타일",
    "Edit": "편집",
    "Analyze": "분석",
    "Magic Captions": "매직 캡션",
    "Suggestions": "추천",
    "Type your own...": "직접 입력...",
    "Add": "추가",
    "Select a caption on the image to edit its style.": "이미지에서 캡션을 선택하면 스타일을 편집할 수 있습니다.",
    "Text:": "텍스트:",
    "Font Size:": "글자 크기:",
    "Outline Width:": "외곽선 두께:",
    "Text Color:": "글자 색:",
    "Outline Color:": "외곽선 색:",
    "Choose...": "선택...",
    "Choose Color": "색 선택",
    "Delete Caption": "캡션 삭제",
    "Describe how the image should change:": "이미지를 어떻게 바꿀지 설명하세요:",
    "e.g. Add a retro filter, make it snow...": "예: 레트로 필터 추가, 눈 내리게 하기...",
    "Generate Edit": "편집 생성",
    "Analyze Image": "이미지 분석",
    "Description:": "설명:",
    "Mood:": "분위기:",
    "Keywords:": "키워드:",
    "Clear Analysis": "분석 지우기",

    # ---- Status messages ----
    "Caption added": "캡션 추가됨",
    "Caption deleted": "캡션 삭제됨",
    "caption suggestions ready": "개의 캡션 추천 완료",
    "Analysis complete": "분석 완료",
    "Image edited": "이미지 편집 완료",
    "AI request failed": "AI 요청 실패",
    "Loading": "불러오는 중",
    "Loaded": "불러옴",
    "Could not open image": "이미지를 열 수 없습니다",
    "Could not load template": "템플릿을 불러올 수 없습니다",
    "Nothing to export": "내보낼 이미지가 없습니다",
    "Exporting...": "내보내는 중...",
    "Meme saved": "밈 저장됨",
    "Export failed": "내보내기 실패",

    # ---- Settings ----
    "Gemini API Key": "Gemini API 키",
    "API key:": "API 키:",
    "API key saved": "API 키 저장됨",
    "Choose Export Folder": "내보내기 폴더 선택",
    "Export folder": "내보내기 폴더",
}
