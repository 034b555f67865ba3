NEW_ACCOUNT_SUBJECT = "Account confirmation message from SquareIt"
RESEND_NEW_ACCOUNT_SUBJECT = "New account confirmation message from SquareIt"
ACCOUNT_CONFIRMED_SUBJECT = "Welcome to SquareIt - Account confirmed!"

NEW_ACCOUNT_TEXT = """Hello {first_name},

Open the link below to verify your SquareIt account:
{confirm_link}

Does the activation link not work? Request a new one here:
{resend_link}

-- SquareIt
"""

NEW_ACCOUNT_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8" name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="background-color: #FAFAFA; font-family: sans-serif;">
    <div style="max-width: 500px; margin: 25px auto; background-color: black; color: #F0E68C; font-weight: bold; text-align: center;">
        <h1 style="background-color: #F0E68C; color: black; padding: 15px 0; margin: 0;">SquareIt</h1>
        <h1>Hello {first_name}</h1>
        <p>Click on the link below to verify your account.</p>
        <p><a href="{confirm_link}" style="color: #F0E68C;">Verify account</a></p>
        <p>Does the activation link not work?</p>
        <p><a href="{resend_link}" style="color: #F0E68C;">Resend verification email</a></p>
        <footer style="padding: 5px; color: black; background-color: #F0E68C;">Copyright &copy; SquareIt</footer>
    </div>
</body>
</html>
"""

ACCOUNT_CONFIRMED_TEXT = """Good news, {first_name}!

Your SquareIt account is confirmed.

-- SquareIt
"""

ACCOUNT_CONFIRMED_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8" name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="background-color: #FAFAFA; font-family: sans-serif;">
    <div style="max-width: 500px; margin: 25px auto; background-color: black; color: #F0E68C; font-weight: bold; text-align: center;">
        <h1 style="background-color: #F0E68C; color: black; padding: 15px 0; margin: 0;">SquareIt</h1>
        <h1>Good news, {first_name}</h1>
        <p>Account confirmed.</p>
        <footer style="padding: 5px; color: black; background-color: #F0E68C;">Copyright &copy; SquareIt</footer>
    </div>
</body>
</html>
"""
