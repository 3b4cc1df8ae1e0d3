"""
示例竞赛数据, 用于初始化演示数据库
"""

SAMPLE_COMPETITIONS = [
    {
        "title": "Summer Photography Contest",
        "image_url": "https://images.unsplash.com/photo-1452587925148-ce544e77e70d?w=800&q=80",
        "category": "Photography",
        "deadline": "Jul 15, 2024",
        "prize_value": "$2,500",
        "difficulty": "easy",
        "requirements": "Submit up to 3 original summer-themed photographs taken within the last 6 months.",
        "rules": "All entries must be original work. No watermarks or signatures on images.",
    },
    {
        "title": "Mobile App Innovation Challenge",
        "image_url": "https://images.unsplash.com/photo-1551650975-87deedd944c3?w=800&q=80",
        "category": "Technology",
        "deadline": "Aug 30, 2024",
        "prize_value": "$10,000",
        "difficulty": "hard",
        "requirements": "Develop a working prototype of a mobile app that addresses a social or environmental issue.",
        "rules": "Apps must be original and not previously published on any app store.",
    },
    {
        "title": "Sustainable Fashion Design",
        "image_url": "https://images.unsplash.com/photo-1558769132-cb1aea458c5e?w=800&q=80",
        "category": "Fashion",
        "deadline": "Sep 10, 2024",
        "prize_value": "$5,000",
        "difficulty": "medium",
        "requirements": "Create a fashion design using sustainable or recycled materials.",
        "rules": "Designs must be original and include a written explanation of sustainability features.",
    },
    {
        "title": "Short Story Competition",
        "image_url": "https://images.unsplash.com/photo-1457369804613-52c61a468e7d?w=800&q=80",
        "category": "Writing",
        "deadline": "Jul 20, 2024",
        "prize_value": "$1,500",
        "difficulty": "medium",
        "requirements": "Write a short story (max 3,000 words) on the theme of 'New Beginnings'.",
        "rules": "Stories must be original and not previously published elsewhere.",
    },
    {
        "title": "Culinary Innovation Award",
        "image_url": "https://images.unsplash.com/photo-1556910103-1c02745aae4d?w=800&q=80",
        "category": "Food",
        "deadline": "Aug 5, 2024",
        "prize_value": "$3,000",
        "difficulty": "easy",
        "requirements": "Create an original recipe using a specific seasonal ingredient (to be announced).",
        "rules": "Recipe must be original and include high-quality photos of the finished dish.",
    },
    {
        "title": "Game Development Hackathon",
        "image_url": "https://images.unsplash.com/photo-1511512578047-dfb367046420?w=800&q=80",
        "category": "Technology",
        "deadline": "Oct 15, 2024",
        "prize_value": "$7,500",
        "difficulty": "hard",
        "requirements": "Develop a playable game prototype in 48 hours based on a provided theme.",
        "rules": "All code and assets must be created during the hackathon period.",
    },
    {
        "title": "Urban Mural Design Contest",
        "image_url": "https://images.unsplash.com/photo-1551913902-c92207136625?w=800&q=80",
        "category": "Art",
        "deadline": "Sep 30, 2024",
        "prize_value": "$4,000",
        "difficulty": "medium",
        "requirements": "Design a mural concept for a specific urban location (details provided upon registration).",
        "rules": "Design must be original and consider the cultural context of the location.",
    },
    {
        "title": "Fitness Challenge",
        "image_url": "https://images.unsplash.com/photo-1517836357463-d25dfeac3438?w=800&q=80",
        "category": "Health",
        "deadline": "Ongoing",
        "prize_value": "$1,000 Monthly",
        "difficulty": "easy",
        "requirements": "Complete a series of fitness challenges and document your progress.",
        "rules": "Participants must submit weekly updates with photo or video evidence.",
    },
]
