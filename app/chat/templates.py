"""Canned replies, keyed by intent. {dealer} is filled from settings."""
from typing import Dict, List

from app.models.dto import Intent

HOURS_LINE = (
    "We're open Monday-Friday 8:30 AM - 6:00 PM, Saturday 9:00 AM - 4:00 PM, "
    "and Sunday 10:00 AM - 2:00 PM."
)

TEMPLATES: Dict[Intent, List[str]] = {
    Intent.GREETING: [
        "Hello! I'm your {dealer} assistant. How can I help you find your dream car today?",
        "Hi there! Ready to help you discover the perfect vehicle. What are you looking for?",
        "Welcome to {dealer}! I'm here to assist with all your car needs. How can I help?",
    ],
    Intent.FINANCING: [
        "We offer flexible financing options at {dealer}:\n\n"
        "• Competitive interest rates starting from 8.5%\n"
        "• Loan terms from 12 to 84 months\n"
        "• Low down payment options available\n"
        "• Quick approval process (24-48 hours)\n"
        "• Both employed and self-employed applicants welcome\n\n"
        "Would you like to calculate monthly payments or apply for pre-approval?",
        "Financing at {dealer} is simple:\n\n"
        "• Rates from 8.5% per year\n"
        "• Terms between 12 and 84 months\n"
        "• Approval in 24-48 hours\n\n"
        "Tell me the amount, rate and term (e.g. \"2 million at 12% for 36 months\") "
        "and I'll estimate your monthly payment.",
    ],
    Intent.TEST_DRIVE: [
        "Scheduling a test drive is easy:\n\n"
        "1. Choose your preferred vehicle\n"
        "2. Select a convenient date and time\n"
        "3. Visit our showroom or request a home test drive\n\n"
        f"{HOURS_LINE}\n\n"
        "Would you like me to help you schedule a test drive?",
        "We'd love to get you behind the wheel!\n\n"
        "Pick a vehicle and a time that suits you, and we'll have it ready at the showroom "
        "or bring it to your home.\n\n"
        f"{HOURS_LINE}\n\n"
        "Which vehicle would you like to try?",
    ],
    Intent.CONTACT: [
        "You can reach us through:\n\n"
        "📍 Showroom: 123 Auto Plaza, Nairobi (Near ABC Mall, Off Mombasa Road)\n"
        "📞 Phone: +254 700 123 456 / +254 712 345 678\n"
        "📱 WhatsApp: +254 712 345 678\n"
        "📧 Email: info@atromotors.com\n"
        "🌐 Website: www.atromotors.com\n\n"
        "Our team is available 7 days a week to assist you.",
        "Get in touch with {dealer}:\n\n"
        "📞 +254 700 123 456\n"
        "📱 WhatsApp +254 712 345 678 for immediate assistance\n"
        "📧 info@atromotors.com\n\n"
        "Or visit our showroom at 123 Auto Plaza, Nairobi.",
    ],
    Intent.HOURS: [
        "Our business hours:\n\n"
        "Monday - Friday: 8:30 AM - 6:00 PM\n"
        "Saturday: 9:00 AM - 4:00 PM\n"
        "Sunday: 10:00 AM - 2:00 PM\n"
        "Public Holidays: 10:00 AM - 3:00 PM\n\n"
        "Test drives can be scheduled during these hours.",
        f"{HOURS_LINE}\n"
        "On public holidays we open 10:00 AM - 3:00 PM.\n\n"
        "Is there a day that works best for your visit?",
    ],
    Intent.WARRANTY: [
        "All our vehicles come with comprehensive warranty options:\n\n"
        "• Standard 6-month warranty on all vehicles\n"
        "• Extended warranty available up to 24 months\n"
        "• Covers engine, transmission, and major components\n"
        "• Includes roadside assistance\n"
        "• Transferable to new owner\n\n"
        "Warranty duration depends on vehicle age, mileage, and condition.",
        "Every vehicle from {dealer} is covered:\n\n"
        "• 6 months standard, extendable to 24 months\n"
        "• Engine, transmission and major components\n"
        "• Roadside assistance included\n\n"
        "Would you like the warranty details for a specific vehicle?",
    ],
    Intent.GENERAL: [
        "I'd be happy to help with that! Could you provide more details so I can assist you better?",
        "That's a great question! Let me connect you with the right information. "
        "What specifically would you like to know?",
        "I understand you're looking for information. Could you tell me more about what you need help with?",
    ],
}

NO_MATCH_RESPONSE = (
    "I couldn't find any vehicles matching your criteria. "
    "Could you be more specific or try different search terms?"
)

VEHICLE_LIST_CLOSING = "Would you like more details on any of these vehicles?"

FINANCING_UPSELL = "We also offer financing options to make your dream car more affordable."

LOOKUP_FAILURE_RESPONSE = (
    "I apologize, but I'm having trouble processing your request. "
    "Please try again or contact our support team directly."
)
